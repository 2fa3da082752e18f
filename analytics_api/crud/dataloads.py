from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select

from ..application import db_session
from ..errors import RecordNotFoundError
from ..models.orm.dataloads import Dataload as ORMDataload
from . import update_data


async def create_dataload(dataset_id: int, datasource_id: int) -> ORMDataload:
    new_dataload = ORMDataload(
        dataset_id=dataset_id,
        datasource_id=datasource_id,
        name="New",
        schedule="",
        option=dict(),
    )
    session = db_session()
    session.add(new_dataload)
    await session.flush()

    return new_dataload


async def get_dataload(dataload_id: int) -> ORMDataload:
    row: ORMDataload = await db_session().get(ORMDataload, dataload_id)
    if row is None:
        raise RecordNotFoundError(f"Dataload with id {dataload_id} does not exist")
    return row


async def get_dataloads(dataset_id: int) -> List[ORMDataload]:
    rows = await db_session().scalars(
        select(ORMDataload)
        .where(ORMDataload.dataset_id == dataset_id)
        .order_by(ORMDataload.id)
    )
    return list(rows)


async def get_dataloads_by_schedule(schedule: str) -> List[ORMDataload]:
    rows = await db_session().scalars(
        select(ORMDataload)
        .where(ORMDataload.schedule == schedule)
        .order_by(ORMDataload.id)
    )
    return list(rows)


async def update_dataload(
    dataload_id: int,
    name: str,
    schedule: str,
    option: Optional[Dict[str, Any]] = None,
) -> ORMDataload:
    """Options are stored as given, datasources validate them on read."""

    row: ORMDataload = await get_dataload(dataload_id)
    return await update_data(
        row,
        {"name": name, "schedule": schedule, "option": dict(option or {})},
    )


async def delete_dataload(dataload_id: int) -> int:
    result = await db_session().execute(
        delete(ORMDataload).where(ORMDataload.id == dataload_id)
    )
    return result.rowcount


async def delete_dataloads_by_dataset(dataset_id: int) -> int:
    result = await db_session().execute(
        delete(ORMDataload).where(ORMDataload.dataset_id == dataset_id)
    )
    return result.rowcount
