from typing import Any, List

from sqlalchemy import delete, select

from ..application import db_session
from ..errors import RecordNotFoundError
from ..models.enum.thresholds import Severity
from ..models.orm.thresholds import Threshold as ORMThreshold


async def create_threshold(
    dataset_id: int, dimension1: str, option: str, value: str, severity: Any = None
) -> ORMThreshold:
    new_threshold = ORMThreshold(
        dataset_id=dataset_id,
        dimension1=dimension1,
        option=option,
        value=value,
        severity=int(Severity.coerce(severity)),
    )
    session = db_session()
    session.add(new_threshold)
    await session.flush()

    return new_threshold


async def get_threshold(threshold_id: int) -> ORMThreshold:
    row: ORMThreshold = await db_session().get(ORMThreshold, threshold_id)
    if row is None:
        raise RecordNotFoundError(f"Threshold with id {threshold_id} does not exist")
    return row


async def get_thresholds(dataset_id: int) -> List[ORMThreshold]:
    rows = await db_session().scalars(
        select(ORMThreshold)
        .where(ORMThreshold.dataset_id == dataset_id)
        .order_by(ORMThreshold.id)
    )
    return list(rows)


async def delete_threshold(threshold_id: int) -> int:
    result = await db_session().execute(
        delete(ORMThreshold).where(ORMThreshold.id == threshold_id)
    )
    return result.rowcount


async def delete_thresholds_by_dataset(dataset_id: int) -> int:
    result = await db_session().execute(
        delete(ORMThreshold).where(ORMThreshold.dataset_id == dataset_id)
    )
    return result.rowcount
