from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    id: str
    name: Optional[str] = Field(None, alias="displayName")
    email: Optional[str] = None
    role: str = "USER"
    groups: List[str] = list()

    model_config = ConfigDict(populate_by_name=True)
