from typing import List, Optional

from sqlalchemy import select

from ..application import db_session
from ..models.enum.activity import ActivityObject, ActivitySubject
from ..models.orm.activity import Activity as ORMActivity


async def create_activity(
    dataset_id: int,
    object_type: ActivityObject,
    subject: ActivitySubject,
    user_id: Optional[str] = None,
) -> ORMActivity:
    new_activity = ORMActivity(
        dataset_id=dataset_id,
        object_type=str(object_type),
        subject=str(subject),
        user_id=user_id,
    )
    session = db_session()
    session.add(new_activity)
    await session.flush()

    return new_activity


async def get_activities(dataset_id: int) -> List[ORMActivity]:
    rows = await db_session().scalars(
        select(ORMActivity)
        .where(ORMActivity.dataset_id == dataset_id)
        .order_by(ORMActivity.id)
    )
    return list(rows)
