from typing import Dict

from fastapi import APIRouter, Depends, Response
from fastapi.responses import ORJSONResponse

from ...authentication.token import get_user
from ...crud import datasets
from ...models.orm.datasets import Dataset as ORMDataset
from ...models.pydantic.authentication import User
from ...models.pydantic.datasets import Dataset, DatasetCreateIn, DatasetResponse
from .. import owned_dataset_dependency, readable_dataset_dependency

router = APIRouter()


@router.get(
    "/{dataset_id}",
    response_class=ORJSONResponse,
    tags=["Datasets"],
    response_model=DatasetResponse,
)
async def get_dataset(
    *, dataset: ORMDataset = Depends(readable_dataset_dependency)
) -> DatasetResponse:
    """Get a dataset.

    The dataset owner or a user with `ADMIN` user role can do this
    operation. So can users the dataset is shared with, directly or
    through one of their groups.
    """
    return DatasetResponse(data=Dataset.model_validate(dataset))


@router.post(
    "",
    response_class=ORJSONResponse,
    tags=["Datasets"],
    response_model=DatasetResponse,
    status_code=201,
)
async def create_dataset(
    *,
    request: DatasetCreateIn,
    user: User = Depends(get_user),
    response: Response,
) -> DatasetResponse:
    """Create a dataset. The user that creates a dataset becomes its owner."""

    input_data: Dict = request.model_dump(exclude_none=True, by_alias=True)
    input_data["owner_id"] = user.id

    new_dataset: ORMDataset = await datasets.create_dataset(**input_data)
    response.headers["Location"] = f"/dataset/{new_dataset.id}"

    return DatasetResponse(data=Dataset.model_validate(new_dataset))


@router.delete(
    "/{dataset_id}",
    response_class=ORJSONResponse,
    tags=["Datasets"],
    response_model=DatasetResponse,
)
async def delete_dataset(
    *, dataset: ORMDataset = Depends(owned_dataset_dependency)
) -> DatasetResponse:
    """Delete a dataset together with its shares, thresholds, dataloads and
    data.

    Only the dataset owner or a user with `ADMIN` user role can do this
    operation.
    """
    data = Dataset.model_validate(dataset)
    await datasets.delete_dataset(dataset.id)

    return DatasetResponse(data=data)
