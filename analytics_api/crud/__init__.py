from typing import Any, Dict, Union

from pydantic import BaseModel

from ..application import db_session
from ..models.orm.base import Base


async def update_data(
    row: Base, input_data: Union[BaseModel, Dict[str, Any]]
) -> Base:
    """Merge updated fields with existing fields."""

    if not input_data:
        return row

    if isinstance(input_data, BaseModel):
        input_data = input_data.model_dump(exclude_unset=True, by_alias=True)

    for key, value in input_data.items():
        setattr(row, key, value)

    session = db_session()
    await session.flush()
    await session.refresh(row)

    return row
