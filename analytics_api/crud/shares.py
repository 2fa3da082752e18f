from typing import List, Optional, Sequence

from sqlalchemy import and_, delete, or_, select

from ..application import db_session
from ..errors import RecordNotFoundError
from ..models.enum.shares import DIRECT_SHARE_TYPES, ShareType
from ..models.orm.datasets import Dataset as ORMDataset
from ..models.orm.shares import Share as ORMShare
from ..utils.security import generate_token, hash_password
from . import update_data


async def create_share(
    dataset_id: int,
    share_type: ShareType,
    target: Optional[str],
    initiator_id: Optional[str] = None,
) -> ORMShare:
    """Create a share. Link shares get a token and never a target."""

    if share_type == ShareType.link:
        token: Optional[str] = generate_token()
        target = None
    else:
        token = None

    new_share = ORMShare(
        dataset_id=dataset_id,
        type=int(share_type),
        target=target,
        token=token,
        initiator_id=initiator_id,
    )
    session = db_session()
    session.add(new_share)
    await session.flush()

    return new_share


async def get_share(share_id: int) -> ORMShare:
    row: ORMShare = await db_session().get(ORMShare, share_id)
    if row is None:
        raise RecordNotFoundError(f"Share with id {share_id} does not exist")
    return row


async def get_shares(dataset_id: int) -> List[ORMShare]:
    rows = await db_session().scalars(
        select(ORMShare).where(ORMShare.dataset_id == dataset_id).order_by(ORMShare.id)
    )
    return list(rows)


async def update_share_password(share_id: int, password: str) -> ORMShare:
    """Set the viewer password, an empty string removes it."""

    row: ORMShare = await get_share(share_id)
    password_hash = hash_password(password) if password != "" else None

    return await update_data(row, {"password": password_hash})


async def delete_share(share_id: int) -> int:
    result = await db_session().execute(delete(ORMShare).where(ORMShare.id == share_id))
    return result.rowcount


async def delete_shares_by_dataset(dataset_id: int) -> int:
    result = await db_session().execute(
        delete(ORMShare).where(ORMShare.dataset_id == dataset_id)
    )
    return result.rowcount


async def get_datasets_by_group(group_id: str) -> List[ORMDataset]:
    rows = await db_session().scalars(
        select(ORMDataset)
        .join(ORMShare, ORMShare.dataset_id == ORMDataset.id)
        .where(ORMShare.type == int(ShareType.group), ORMShare.target == group_id)
        .order_by(ORMShare.id)
    )
    return list(rows)


async def get_datasets_by_user(user_id: str) -> List[ORMDataset]:
    rows = await db_session().scalars(
        select(ORMDataset)
        .join(ORMShare, ORMShare.dataset_id == ORMDataset.id)
        .where(
            ORMShare.type.in_([int(t) for t in DIRECT_SHARE_TYPES]),
            ORMShare.target == user_id,
        )
        .order_by(ORMShare.id)
    )
    return list(rows)


async def get_shared_datasets(
    user_id: str, group_ids: Sequence[str], deduplicate: bool = False
) -> List[ORMDataset]:
    """Datasets shared with the user's groups, followed by those shared
    with the user directly.

    A dataset reachable through several shares is listed once per share
    unless ``deduplicate`` is set. Link shares are resolved by token and
    never show up here.
    """

    shared: List[ORMDataset] = list()
    for group_id in group_ids:
        shared.extend(await get_datasets_by_group(group_id))
    shared.extend(await get_datasets_by_user(user_id))

    if deduplicate:
        seen = set()
        unique = list()
        for dataset in shared:
            if dataset.id not in seen:
                seen.add(dataset.id)
                unique.append(dataset)
        shared = unique

    return shared


async def get_share_by_token(token: str) -> ORMShare:
    row: Optional[ORMShare] = await db_session().scalar(
        select(ORMShare).where(
            ORMShare.token == token, ORMShare.type == int(ShareType.link)
        )
    )
    if row is None:
        raise RecordNotFoundError("No dataset is shared with this token")
    return row


async def get_dataset_by_token(token: str) -> ORMDataset:
    share: ORMShare = await get_share_by_token(token)
    row: ORMDataset = await db_session().get(ORMDataset, share.dataset_id)
    if row is None:
        raise RecordNotFoundError("No dataset is shared with this token")
    return row


async def get_shared_dataset(
    dataset_id: int, user_id: str, group_ids: Sequence[str]
) -> ORMDataset:
    """A dataset shared with the user directly or with one of the user's
    groups. Link shares do not count."""

    row: Optional[ORMDataset] = await db_session().scalar(
        select(ORMDataset)
        .join(ORMShare, ORMShare.dataset_id == ORMDataset.id)
        .where(
            ORMDataset.id == dataset_id,
            or_(
                and_(
                    ORMShare.type.in_([int(t) for t in DIRECT_SHARE_TYPES]),
                    ORMShare.target == user_id,
                ),
                and_(
                    ORMShare.type == int(ShareType.group),
                    ORMShare.target.in_(list(group_ids)),
                ),
            ),
        )
        .limit(1)
    )
    if row is None:
        raise RecordNotFoundError(
            f"Dataset with id {dataset_id} is not shared with user {user_id}"
        )
    return row
