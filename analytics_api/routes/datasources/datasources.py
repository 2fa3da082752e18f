"""Datasources are the connectors a dataload reads from.

Each datasource describes the options it needs as a template. Reading a
datasource returns its raw rows without storing them.
"""
import json
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import ORJSONResponse

from ...authentication.token import get_user
from ...datasources.registry import DatasourceRegistry, get_registry
from ...models.pydantic.authentication import User
from ...models.pydantic.datasources import (
    DatasourceReadIn,
    DatasourceResultResponse,
    DatasourcesResponse,
    TemplatesResponse,
)
from . import read_datasource

router = APIRouter()


@router.get(
    "",
    response_class=ORJSONResponse,
    tags=["Datasources"],
    response_model=DatasourcesResponse,
)
async def get_datasources(
    *,
    registry: DatasourceRegistry = Depends(get_registry),
    user: User = Depends(get_user),
) -> DatasourcesResponse:
    """List all available datasources by id."""

    return DatasourcesResponse(data=registry.list_all())


@router.get(
    "/templates",
    response_class=ORJSONResponse,
    tags=["Datasources"],
    response_model=TemplatesResponse,
)
async def get_templates(
    *,
    registry: DatasourceRegistry = Depends(get_registry),
    user: User = Depends(get_user),
) -> TemplatesResponse:
    """Option templates of all datasources by id."""

    return TemplatesResponse(data=registry.list_templates())


@router.get(
    "/read",
    response_class=ORJSONResponse,
    tags=["Datasources"],
    response_model=DatasourceResultResponse,
)
async def read(
    *,
    datasource_id: int = Query(..., description="Id of the datasource"),
    option: str = Query(
        "{}", description="JSON object mapping template field ids to values"
    ),
    registry: DatasourceRegistry = Depends(get_registry),
    user: User = Depends(get_user),
) -> DatasourceResultResponse:
    """Read a datasource with the given options."""

    try:
        options: Dict[str, Any] = json.loads(option)
    except ValueError:
        raise HTTPException(status_code=400, detail="`option` must be valid JSON")
    if not isinstance(options, dict):
        raise HTTPException(status_code=400, detail="`option` must be a JSON object")

    result = await read_datasource(registry, datasource_id, options, user)
    return DatasourceResultResponse(data=result)


@router.post(
    "/read",
    response_class=ORJSONResponse,
    tags=["Datasources"],
    response_model=DatasourceResultResponse,
)
async def read_post(
    *,
    request: DatasourceReadIn,
    registry: DatasourceRegistry = Depends(get_registry),
    user: User = Depends(get_user),
) -> DatasourceResultResponse:
    """Read a datasource with the options given in the request body."""

    result = await read_datasource(
        registry, request.datasource_id, request.option, user
    )
    return DatasourceResultResponse(data=result)
