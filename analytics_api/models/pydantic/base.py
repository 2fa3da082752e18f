from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BaseORMRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class BaseRecord(BaseModel):
    created_on: datetime
    updated_on: datetime

    model_config = ConfigDict(from_attributes=True)


class StrictBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)
