from typing import Any, Mapping

from fastapi import HTTPException
from fastapi.logger import logger

from ...datasources.base import UPSTREAM_ERRORS
from ...datasources.registry import DatasourceRegistry
from ...errors import DatasourceValidationError, RecordNotFoundError, UnauthorizedError
from ...models.pydantic.authentication import User
from ...models.pydantic.datasources import DatasourceResult


async def read_datasource(
    registry: DatasourceRegistry,
    datasource_id: int,
    options: Mapping[str, Any],
    user: User,
) -> DatasourceResult:
    """Read a datasource as the given user, translating its failures into
    HTTP errors."""
    try:
        return await registry.read(datasource_id, options, user)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnauthorizedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatasourceValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UPSTREAM_ERRORS as e:
        logger.error(f"Failed to read datasource {datasource_id}: {e}")
        raise HTTPException(
            status_code=502, detail=f"Datasource could not be read: {e}"
        )
