from typing import Any, List, Mapping

from ..authentication.datasets import can_read_dataset
from ..crud import data as data_crud
from ..crud import datasets as datasets_crud
from ..errors import UnauthorizedError
from ..models.enum.datasources import DatasourceType
from ..models.pydantic.authentication import User
from ..models.pydantic.datasources import DatasourceResult, TemplateField
from .base import Datasource, int_option, require_option


def _dataset_id(options: Mapping[str, Any]) -> int:
    dataset_id = int_option(options, "dataset")
    if dataset_id is None:
        require_option(options, "dataset")
    return dataset_id


class InternalDB(Datasource):
    """Rows already stored for a dataset of this service."""

    id = DatasourceType.internal_db
    name = "Internal database"

    def template(self) -> List[TemplateField]:
        return [
            TemplateField(id="dataset", name="Dataset ID", placeholder="id"),
            TemplateField(id="limit", name="Limit", placeholder="Number of rows"),
        ]

    async def authorize(self, options: Mapping[str, Any], user: User) -> None:
        """Only users who can read the source dataset may read its rows.

        Raises RecordNotFoundError for unknown datasets.
        """
        dataset = await datasets_crud.get_dataset(_dataset_id(options))
        if not await can_read_dataset(dataset, user):
            raise UnauthorizedError(
                f"User {user.id} has no access to dataset {dataset.id}"
            )

    async def read_data(self, options: Mapping[str, Any]) -> DatasourceResult:
        rows = await data_crud.get_rows(
            _dataset_id(options), limit=int_option(options, "limit")
        )

        return DatasourceResult(
            header=["Dimension 1", "Dimension 2", "Value"],
            data=[[row.dimension1, row.dimension2, row.value] for row in rows],
        )
