from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..enum.datasources import TemplateFieldType
from .base import StrictBaseModel
from .responses import Response


class TemplateField(StrictBaseModel):
    id: str
    name: str
    placeholder: str = ""
    type: TemplateFieldType = TemplateFieldType.text

    @property
    def choices(self) -> List[str]:
        if self.type != TemplateFieldType.choice:
            return list()
        return self.placeholder.split("/")


class DatasourceResult(BaseModel):
    header: List[str] = list()
    data: List[List[Any]] = list()
    error: int = 0
    rawdata: Optional[str] = None


class DatasourceReadIn(StrictBaseModel):
    datasource_id: int
    option: Dict[str, Any] = Field(default_factory=dict)


class DatasourcesResponse(Response):
    data: Dict[int, str]


class TemplatesResponse(Response):
    data: Dict[int, List[TemplateField]]


class DatasourceResultResponse(Response):
    data: DatasourceResult
