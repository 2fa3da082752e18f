from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import BaseRecord, StrictBaseModel
from .datasources import DatasourceResult, TemplateField
from .responses import Response


class Dataload(BaseRecord):
    id: int
    dataset_id: int
    datasource_id: int
    name: str
    schedule: str
    option: Dict[str, Any]


class DataloadCreateIn(StrictBaseModel):
    dataset_id: int
    datasource_id: int


class DataloadUpdateIn(StrictBaseModel):
    name: str = Field(..., min_length=1)
    schedule: str = Field(
        "", description="Schedule key picked up by the scheduler; empty = manual only"
    )
    option: Dict[str, Any] = Field(
        default_factory=dict,
        description="Template field id to value, as described by the datasource template",
    )


class DataloadRunIn(StrictBaseModel):
    dataload_id: int


class DataloadOverview(StrictBaseModel):
    dataloads: List[Dataload]
    datasources: Dict[int, str]
    templates: Dict[int, List[TemplateField]]


class DataloadExecution(StrictBaseModel):
    error: int = 0
    insert: int = 0
    update: int = 0
    message: Optional[str] = None


class DataloadResponse(Response):
    data: Dataload


class DataloadOverviewResponse(Response):
    data: DataloadOverview


class DataloadSimulationResponse(Response):
    data: DatasourceResult


class DataloadExecutionResponse(Response):
    data: DataloadExecution
