from typing import Any, List, Mapping, Optional

import httpx

from analytics_api.application import ContextEngine
from analytics_api.crud import datasets
from analytics_api.datasources.base import Datasource
from analytics_api.models.orm.datasets import Dataset as ORMDataset
from analytics_api.models.pydantic.datasources import DatasourceResult, TemplateField


class StaticDatasource(Datasource):
    """Datasource returning fixed rows, or raising a fixed error."""

    def __init__(
        self,
        id: int = 7,
        name: str = "Static",
        rows: Optional[List[List[Any]]] = None,
        error: Optional[Exception] = None,
    ):
        self.id = id
        self.name = name
        self.rows = rows if rows is not None else [["a", 1], ["b", 2]]
        self.error = error
        self.calls: List[Mapping[str, Any]] = list()

    def template(self) -> List[TemplateField]:
        return [TemplateField(id="rows", name="Rows", placeholder="ignored")]

    async def read_data(self, options: Mapping[str, Any]) -> DatasourceResult:
        self.calls.append(options)
        if self.error is not None:
            raise self.error
        return DatasourceResult(header=["Dimension", "Value"], data=self.rows)


async def create_dataset(owner_id: str, **data) -> ORMDataset:
    """Create a dataset outside of a request."""
    data.setdefault("name", "Visitors")
    async with ContextEngine("WRITE"):
        return await datasets.create_dataset(owner_id=owner_id, **data)


def http_response(
    url: str, status_code: int = 200, text: Optional[str] = None, json: Any = None
) -> httpx.Response:
    request = httpx.Request("GET", url)
    if json is not None:
        return httpx.Response(status_code, json=json, request=request)
    return httpx.Response(status_code, text=text or "", request=request)
