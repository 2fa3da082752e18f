from enum import IntEnum


class ShareType(IntEnum):
    user = 0
    group = 1
    user_group = 2
    link = 3
    room = 10


# Share types whose target is a single user id
DIRECT_SHARE_TYPES = (ShareType.user, ShareType.user_group)
