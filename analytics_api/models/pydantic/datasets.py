from typing import List, Optional

from pydantic import Field

from ..enum.datasources import DatasourceType
from .base import BaseRecord, StrictBaseModel
from .responses import Response


class Dataset(BaseRecord):
    id: int
    name: str
    owner_id: str
    type: int
    dimension1: Optional[str]
    dimension2: Optional[str]
    value: Optional[str]


class DatasetCreateIn(StrictBaseModel):
    name: str = Field(..., min_length=1, description="Display name of the dataset")
    type: int = Field(
        DatasourceType.internal_db,
        description="Datasource type code servicing this dataset. "
        "Type 2 keeps its data in the internal data table.",
    )
    dimension1: Optional[str] = Field(None, description="Label of column 1")
    dimension2: Optional[str] = Field(None, description="Label of column 2")
    value: Optional[str] = Field(None, description="Label of the value column")


class DatasetResponse(Response):
    data: Dataset


class DatasetsResponse(Response):
    data: List[Dataset]
