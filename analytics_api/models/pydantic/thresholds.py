from typing import Any, List, Optional

from pydantic import Field, computed_field, field_validator

from ..enum.thresholds import Severity, SeverityColor
from .base import BaseRecord, StrictBaseModel
from .responses import Response


class Threshold(BaseRecord):
    id: int
    dataset_id: int
    dimension1: str
    option: str
    value: str
    severity: Severity

    @field_validator("severity", mode="before")
    @classmethod
    def coerce_severity(cls, v):
        return Severity.coerce(v)

    @computed_field  # type: ignore[misc]
    @property
    def color(self) -> SeverityColor:
        return self.severity.color


class ThresholdCreateIn(StrictBaseModel):
    dataset_id: int
    dimension1: str = Field(..., description="Column value to compare")
    option: str = Field(..., description="Comparison operator, e.g. `>`, `<`, `=`")
    value: str = Field(..., description="Comparison operand")
    severity: Optional[Any] = Field(
        None,
        description="1 = info, 2 = critical, 3 = warning. "
        "Any other value is stored as info.",
    )

    @field_validator("value", mode="before")
    @classmethod
    def stringify_value(cls, v):
        return v if isinstance(v, str) else str(v)


class ThresholdResponse(Response):
    data: Threshold


class ThresholdsResponse(Response):
    data: List[Threshold]
