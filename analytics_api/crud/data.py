from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy import delete, select

from ..application import db_session
from ..models.orm.data import DataRow as ORMDataRow


async def get_rows(dataset_id: int, limit: Optional[int] = None) -> List[ORMDataRow]:
    query = (
        select(ORMDataRow)
        .where(ORMDataRow.dataset_id == dataset_id)
        .order_by(ORMDataRow.dimension1, ORMDataRow.dimension2)
        .limit(limit)
    )
    rows = await db_session().scalars(query)
    return list(rows)


async def upsert_rows(
    dataset_id: int, rows: Sequence[Tuple[str, str, Any]]
) -> Tuple[int, int]:
    """Insert or update rows keyed by dimension1 and dimension2.

    Returns the number of inserted and updated rows.
    """
    session = db_session()
    inserted = 0
    updated = 0

    for dimension1, dimension2, value in rows:
        value = None if value is None else str(value)
        existing: Optional[ORMDataRow] = await session.scalar(
            select(ORMDataRow).where(
                ORMDataRow.dataset_id == dataset_id,
                ORMDataRow.dimension1 == dimension1,
                ORMDataRow.dimension2 == dimension2,
            )
        )
        if existing is None:
            session.add(
                ORMDataRow(
                    dataset_id=dataset_id,
                    dimension1=dimension1,
                    dimension2=dimension2,
                    value=value,
                )
            )
            inserted += 1
        else:
            existing.value = value
            updated += 1
        # later rows of the same batch must see earlier ones
        await session.flush()

    return inserted, updated


async def delete_rows_by_dataset(dataset_id: int) -> int:
    result = await db_session().execute(
        delete(ORMDataRow).where(ORMDataRow.dataset_id == dataset_id)
    )
    return result.rowcount
