from datetime import datetime
from typing import Any, List, Optional, Tuple

from fastapi.logger import logger

from ..crud import activity, data, dataloads, datasets
from ..datasources.base import UPSTREAM_ERRORS
from ..datasources.registry import DatasourceRegistry
from ..errors import DatasourceValidationError, RecordNotFoundError, UnauthorizedError
from ..models.enum.activity import ActivityObject, ActivitySubject
from ..models.enum.dataloads import DataloadError, DataloadMode
from ..models.orm.dataloads import Dataload as ORMDataload
from ..models.pydantic.authentication import User
from ..models.pydantic.dataloads import DataloadExecution
from ..models.pydantic.datasources import DatasourceResult


def normalize_rows(
    result: DatasourceResult, timestamp: bool = False, now: Optional[datetime] = None
) -> List[Tuple[str, str, Any]]:
    """Bring datasource rows into the (dimension1, dimension2, value) shape.

    Two column rows have no second dimension. With ``timestamp`` the
    second dimension is the time of the load.
    """
    stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    rows = list()
    for row in result.data:
        if len(row) == 2:
            dimension1, value = row
            dimension2: Any = ""
        elif len(row) == 3:
            dimension1, dimension2, value = row
        else:
            raise DatasourceValidationError(
                f"Rows need 2 or 3 columns, got {len(row)}: {row}"
            )
        if timestamp:
            dimension2 = stamp
        rows.append((str(dimension1), str(dimension2), value))
    return rows


def _is_true(value: Any) -> bool:
    return str(value).strip().lower() == "true"


async def _reader(dataload: ORMDataload, user: Optional[User]) -> User:
    """The user a dataload reads its datasource as.

    Without a caller, as for scheduled runs, it is the owner of the
    dataset the dataload fills. Group memberships of the owner are not
    known then.
    """
    if user is not None:
        return user
    dataset = await datasets.get_dataset(dataload.dataset_id)
    return User(id=dataset.owner_id)


async def simulate_dataload(
    dataload: ORMDataload, registry: DatasourceRegistry, user: Optional[User] = None
) -> DatasourceResult:
    """Read the datasource of a dataload without storing anything."""

    reader = await _reader(dataload, user)
    return await registry.read(dataload.datasource_id, dataload.option or {}, reader)


async def execute_dataload(
    dataload: ORMDataload, registry: DatasourceRegistry, user: Optional[User] = None
) -> DataloadExecution:
    """Read the datasource of a dataload and upsert its rows into the
    dataset.

    Failures of the datasource are reported through the error code of
    the result, they never propagate.
    """
    options = dataload.option or {}
    try:
        reader = await _reader(dataload, user)
        result = await registry.read(dataload.datasource_id, options, reader)
        rows = normalize_rows(result, timestamp=_is_true(options.get("timestamp")))
    except DatasourceValidationError as e:
        logger.warning(f"Dataload {dataload.id} has invalid options: {e}")
        return DataloadExecution(error=DataloadError.validation, message=str(e))
    except RecordNotFoundError as e:
        logger.warning(f"Dataload {dataload.id} points to a missing record: {e}")
        return DataloadExecution(error=DataloadError.not_found, message=str(e))
    except UnauthorizedError as e:
        logger.warning(f"Dataload {dataload.id} was denied: {e}")
        return DataloadExecution(error=DataloadError.unauthorized, message=str(e))
    except UPSTREAM_ERRORS as e:
        logger.error(f"Dataload {dataload.id} failed to read its datasource: {e}")
        return DataloadExecution(error=DataloadError.upstream, message=str(e))

    inserted, updated = await data.upsert_rows(dataload.dataset_id, rows)
    await activity.create_activity(
        dataload.dataset_id,
        ActivityObject.dataset,
        ActivitySubject.dataload_execute,
        user.id if user is not None else None,
    )
    logger.info(
        f"Dataload {dataload.id}: {inserted} records inserted, {updated} records updated"
    )

    return DataloadExecution(insert=inserted, update=updated)


async def run_dataload(
    dataload_id: int,
    mode: DataloadMode,
    registry: DatasourceRegistry,
    user: Optional[User] = None,
):
    """Simulate or execute a dataload by id.

    Raises RecordNotFoundError for unknown dataloads.
    """
    dataload: ORMDataload = await dataloads.get_dataload(dataload_id)

    if mode == DataloadMode.simulate:
        return await simulate_dataload(dataload, registry, user)
    return await execute_dataload(dataload, registry, user)


async def run_schedule(
    schedule: str, registry: DatasourceRegistry
) -> List[Tuple[int, DataloadExecution]]:
    """Execute all dataloads of a schedule, one after another."""

    results = list()
    for dataload in await dataloads.get_dataloads_by_schedule(schedule):
        results.append((dataload.id, await execute_dataload(dataload, registry)))
    return results
