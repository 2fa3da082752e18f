from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from ..enum.shares import ShareType
from .base import BaseRecord, StrictBaseModel
from .responses import Response


class Share(BaseRecord):
    """Share as returned to dataset owners.

    The stored password hash is never exposed, only whether one is set.
    """

    id: int
    dataset_id: int
    type: ShareType
    target: Optional[str]
    token: Optional[str]
    password: bool = False
    display_name: Optional[str] = Field(None, alias="displayName")

    @field_validator("password", mode="before")
    @classmethod
    def redact_password(cls, v):
        return v is not None and v is not False and v != ""


class ShareCreateIn(StrictBaseModel):
    dataset_id: int
    type: ShareType
    target: Optional[str] = Field(
        None, description="User or group id. Ignored for link shares."
    )

    @model_validator(mode="after")
    def target_required(self) -> "ShareCreateIn":
        if self.type != ShareType.link and not self.target:
            raise ValueError(f"A target is required for share type {self.type.name}")
        return self


class ShareUpdateIn(StrictBaseModel):
    password: str = Field(
        ..., description="New viewer password. An empty string removes it."
    )


class ShareCreated(StrictBaseModel):
    id: int
    token: Optional[str] = None


class ShareResponse(Response):
    data: Share


class SharesResponse(Response):
    data: List[Share]


class ShareCreatedResponse(Response):
    data: ShareCreated


class DeletedCount(StrictBaseModel):
    deleted: int


class DeletedResponse(Response):
    data: DeletedCount
