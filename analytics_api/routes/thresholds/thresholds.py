"""Thresholds flag dataset values which need attention.

A threshold compares the value of a dataset row, selected by its first
dimension, against an operand. Its severity is `1` (info), `2`
(critical) or `3` (warning). Any other severity is stored as info.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from fastapi.responses import ORJSONResponse

from ...authentication.token import get_user
from ...crud import thresholds
from ...errors import RecordNotFoundError
from ...models.orm.datasets import Dataset as ORMDataset
from ...models.orm.thresholds import Threshold as ORMThreshold
from ...models.pydantic.authentication import User
from ...models.pydantic.shares import DeletedCount, DeletedResponse
from ...models.pydantic.thresholds import (
    Threshold,
    ThresholdCreateIn,
    ThresholdResponse,
    ThresholdsResponse,
)
from .. import get_owned_dataset, owned_dataset_dependency

router = APIRouter()


@router.get(
    "/{dataset_id}",
    response_class=ORJSONResponse,
    tags=["Thresholds"],
    response_model=ThresholdsResponse,
)
async def get_thresholds(
    *, dataset: ORMDataset = Depends(owned_dataset_dependency)
) -> ThresholdsResponse:
    """All thresholds of a dataset."""

    rows: List[ORMThreshold] = await thresholds.get_thresholds(dataset.id)
    return ThresholdsResponse(data=[Threshold.model_validate(row) for row in rows])


@router.post(
    "",
    response_class=ORJSONResponse,
    tags=["Thresholds"],
    response_model=ThresholdResponse,
    status_code=201,
)
async def create_threshold(
    *, request: ThresholdCreateIn, user: User = Depends(get_user)
) -> ThresholdResponse:
    """Create a threshold for a dataset."""

    await get_owned_dataset(request.dataset_id, user)
    row = await thresholds.create_threshold(
        request.dataset_id,
        request.dimension1,
        request.option,
        request.value,
        request.severity,
    )
    return ThresholdResponse(data=Threshold.model_validate(row))


@router.delete(
    "/{threshold_id}",
    response_class=ORJSONResponse,
    tags=["Thresholds"],
    response_model=DeletedResponse,
)
async def delete_threshold(
    *, threshold_id: int = Path(..., ge=1), user: User = Depends(get_user)
) -> DeletedResponse:
    """Delete a threshold. Deleting a threshold which does not exist is not
    an error."""

    try:
        row: ORMThreshold = await thresholds.get_threshold(threshold_id)
    except RecordNotFoundError:
        return DeletedResponse(data=DeletedCount(deleted=0))

    await get_owned_dataset(row.dataset_id, user)
    deleted = await thresholds.delete_threshold(threshold_id)
    return DeletedResponse(data=DeletedCount(deleted=deleted))
