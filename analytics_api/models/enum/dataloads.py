from enum import IntEnum, StrEnum


class DataloadMode(StrEnum):
    simulate = "simulate"
    execute = "execute"


class DataloadError(IntEnum):
    none = 0
    upstream = 1
    validation = 2
    not_found = 3
    unauthorized = 4
