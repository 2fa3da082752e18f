"""Datasets are collections of rows with up to two dimensions and a value.

Every dataset has an owner. Other users see a dataset only if it was
shared with them or with one of their groups.
"""
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import ORJSONResponse

from ...authentication.token import get_user
from ...crud import datasets, shares
from ...models.orm.datasets import Dataset as ORMDataset
from ...models.pydantic.authentication import User
from ...models.pydantic.datasets import Dataset, DatasetsResponse
from ...settings.globals import DEDUPLICATE_SHARED_DATASETS

router = APIRouter()


@router.get(
    "",
    response_class=ORJSONResponse,
    tags=["Datasets"],
    response_model=DatasetsResponse,
)
async def get_datasets(*, user: User = Depends(get_user)) -> DatasetsResponse:
    """Get list of all datasets owned by the current user."""

    rows: List[ORMDataset] = await datasets.get_datasets_by_owner(user.id)
    return DatasetsResponse(data=[Dataset.model_validate(row) for row in rows])


@router.get(
    "/shared",
    response_class=ORJSONResponse,
    tags=["Datasets"],
    response_model=DatasetsResponse,
)
async def get_shared_datasets(*, user: User = Depends(get_user)) -> DatasetsResponse:
    """Get list of datasets shared with the current user.

    Datasets shared with the user's groups come first, followed by
    datasets shared with the user directly. A dataset shared more than
    once is listed once per share.
    """
    rows: List[ORMDataset] = await shares.get_shared_datasets(
        user.id, user.groups, deduplicate=DEDUPLICATE_SHARED_DATASETS
    )
    return DatasetsResponse(data=[Dataset.model_validate(row) for row in rows])
