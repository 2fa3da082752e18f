from typing import List

from sqlalchemy import delete, select

from ..application import db_session
from ..errors import RecordNotFoundError
from ..models.orm.datasets import Dataset as ORMDataset
from . import data, dataloads, shares, thresholds


async def get_dataset(dataset_id: int) -> ORMDataset:
    row: ORMDataset = await db_session().get(ORMDataset, dataset_id)

    if row is None:
        raise RecordNotFoundError(f"Dataset with id {dataset_id} does not exist")

    return row


async def get_datasets_by_owner(owner_id: str) -> List[ORMDataset]:
    """Get list of all datasets owned by a user."""

    rows = await db_session().scalars(
        select(ORMDataset).where(ORMDataset.owner_id == owner_id).order_by(ORMDataset.id)
    )
    return list(rows)


async def create_dataset(**data) -> ORMDataset:
    new_dataset = ORMDataset(**data)
    session = db_session()
    session.add(new_dataset)
    await session.flush()

    return new_dataset


async def delete_dataset(dataset_id: int) -> ORMDataset:
    """Delete a dataset with its shares, thresholds, dataloads and data."""

    row: ORMDataset = await get_dataset(dataset_id)

    await shares.delete_shares_by_dataset(dataset_id)
    await thresholds.delete_thresholds_by_dataset(dataset_id)
    await dataloads.delete_dataloads_by_dataset(dataset_id)
    await data.delete_rows_by_dataset(dataset_id)
    await db_session().execute(delete(ORMDataset).where(ORMDataset.id == dataset_id))

    return row
