"""Dataloads fill a dataset from a datasource.

A dataload stores which datasource to read and the option values for
its template. Dataloads can be simulated, returning the rows the
datasource delivers, or executed, upserting those rows into the dataset.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from fastapi.responses import ORJSONResponse

from ...authentication.token import get_user
from ...crud import dataloads
from ...datasources.registry import DatasourceRegistry, get_registry
from ...errors import RecordNotFoundError
from ...models.orm.dataloads import Dataload as ORMDataload
from ...models.orm.datasets import Dataset as ORMDataset
from ...models.pydantic.authentication import User
from ...models.pydantic.dataloads import (
    Dataload,
    DataloadCreateIn,
    DataloadExecutionResponse,
    DataloadOverview,
    DataloadOverviewResponse,
    DataloadResponse,
    DataloadRunIn,
    DataloadSimulationResponse,
    DataloadUpdateIn,
)
from ...models.pydantic.shares import DeletedCount, DeletedResponse
from ...tasks.dataloads import execute_dataload
from .. import get_owned_dataset, owned_dataset_dependency
from ..datasources import read_datasource

router = APIRouter()


async def _get_owned_dataload(dataload_id: int, user: User) -> ORMDataload:
    try:
        row: ORMDataload = await dataloads.get_dataload(dataload_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    await get_owned_dataset(row.dataset_id, user)
    return row


@router.get(
    "/{dataset_id}",
    response_class=ORJSONResponse,
    tags=["Dataloads"],
    response_model=DataloadOverviewResponse,
)
async def get_dataloads(
    *,
    dataset: ORMDataset = Depends(owned_dataset_dependency),
    registry: DatasourceRegistry = Depends(get_registry),
) -> DataloadOverviewResponse:
    """Dataloads of a dataset together with all datasources and their
    templates, everything a client needs to render the dataload editor."""

    rows: List[ORMDataload] = await dataloads.get_dataloads(dataset.id)

    return DataloadOverviewResponse(
        data=DataloadOverview(
            dataloads=[Dataload.model_validate(row) for row in rows],
            datasources=registry.list_all(),
            templates=registry.list_templates(),
        )
    )


@router.post(
    "",
    response_class=ORJSONResponse,
    tags=["Dataloads"],
    response_model=DataloadResponse,
    status_code=201,
)
async def create_dataload(
    *,
    request: DataloadCreateIn,
    user: User = Depends(get_user),
    registry: DatasourceRegistry = Depends(get_registry),
) -> DataloadResponse:
    """Create a dataload named `New` with an empty schedule and no options.

    Only the dataset owner or a user with `ADMIN` user role can do this
    operation.
    """
    await get_owned_dataset(request.dataset_id, user)

    if request.datasource_id not in registry:
        raise HTTPException(
            status_code=404,
            detail=f"Datasource with id {request.datasource_id} does not exist",
        )

    row = await dataloads.create_dataload(request.dataset_id, request.datasource_id)
    return DataloadResponse(data=Dataload.model_validate(row))


@router.put(
    "/{dataload_id}",
    response_class=ORJSONResponse,
    tags=["Dataloads"],
    response_model=DataloadResponse,
)
async def update_dataload(
    *,
    dataload_id: int = Path(..., ge=1),
    request: DataloadUpdateIn,
    user: User = Depends(get_user),
) -> DataloadResponse:
    """Rename a dataload and set its schedule and option values."""

    await _get_owned_dataload(dataload_id, user)
    row = await dataloads.update_dataload(
        dataload_id, request.name, request.schedule, request.option
    )
    return DataloadResponse(data=Dataload.model_validate(row))


@router.delete(
    "/{dataload_id}",
    response_class=ORJSONResponse,
    tags=["Dataloads"],
    response_model=DeletedResponse,
)
async def delete_dataload(
    *,
    dataload_id: int = Path(..., ge=1),
    user: User = Depends(get_user),
) -> DeletedResponse:
    """Delete a dataload. Deleting a dataload which does not exist is not an
    error."""

    try:
        await _get_owned_dataload(dataload_id, user)
    except HTTPException as e:
        if e.status_code != 404:
            raise
        return DeletedResponse(data=DeletedCount(deleted=0))

    deleted = await dataloads.delete_dataload(dataload_id)
    return DeletedResponse(data=DeletedCount(deleted=deleted))


@router.post(
    "/simulate",
    response_class=ORJSONResponse,
    tags=["Dataloads"],
    response_model=DataloadSimulationResponse,
)
async def simulate_dataload(
    *,
    request: DataloadRunIn,
    user: User = Depends(get_user),
    registry: DatasourceRegistry = Depends(get_registry),
) -> DataloadSimulationResponse:
    """Read the datasource of a dataload and return the raw rows.

    Nothing is written to the dataset.
    """
    row = await _get_owned_dataload(request.dataload_id, user)
    result = await read_datasource(
        registry, row.datasource_id, row.option or {}, user
    )
    return DataloadSimulationResponse(data=result)


@router.post(
    "/execute",
    response_class=ORJSONResponse,
    tags=["Dataloads"],
    response_model=DataloadExecutionResponse,
)
async def execute(
    *,
    request: DataloadRunIn,
    user: User = Depends(get_user),
    registry: DatasourceRegistry = Depends(get_registry),
) -> DataloadExecutionResponse:
    """Read the datasource of a dataload and upsert the rows into the
    dataset.

    A datasource which cannot be read does not fail the request. The
    `error` field of the result is `1` if the source could not be
    fetched and `2` if the dataload options are invalid. `3` means the
    datasource or the dataset it reads no longer exists, `4` that the
    user may not read the source dataset.
    """
    row = await _get_owned_dataload(request.dataload_id, user)
    result = await execute_dataload(row, registry, user)
    return DataloadExecutionResponse(data=result)
