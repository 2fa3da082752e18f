import json
import logging
from asyncio.exceptions import TimeoutError as AsyncTimeoutError

from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.logger import logger
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.requests import Request
from fastapi.responses import ORJSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .application import app
from .datasources.registry import init_registry
from .errors import http_error_handler
from .middleware import no_cache_response_header, set_db_mode
from .routes import health
from .routes.dataloads import dataloads
from .routes.datasets import dataset, datasets
from .routes.datasources import datasources
from .routes.shares import shares
from .routes.thresholds import thresholds

################
# LOGGING
################

gunicorn_logger = logging.getLogger("gunicorn.error")
logger.handlers = gunicorn_logger.handlers


################
# ERRORS
################


@app.exception_handler(AsyncTimeoutError)
async def timeout_error_handler(
    request: Request, exc: AsyncTimeoutError
) -> ORJSONResponse:
    """Use JSEND protocol for timeouts."""
    return ORJSONResponse(
        status_code=524,
        content={
            "status": "error",
            "message": "A timeout occurred while processing the request. Request canceled.",
        },
    )


@app.exception_handler(HTTPException)
async def httpexception_error_handler(
    request: Request, exc: HTTPException
) -> ORJSONResponse:
    """Use JSEND protocol for HTTP exceptions."""
    return http_error_handler(exc)


@app.exception_handler(RequestValidationError)
async def rve_error_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    """Use JSEND protocol for validation errors."""
    return ORJSONResponse(
        status_code=422,
        content={
            "status": "failed",
            "message": json.loads(json.dumps(exc.errors(), default=str)),
        },
    )


#################
# DATASOURCES
#################


@app.on_event("startup")
async def load_datasources():
    """Register built-in datasources and installed plugins."""
    init_registry()


#################
# MIDDLEWARE
#################

MIDDLEWARE = (set_db_mode, no_cache_response_header)

for m in MIDDLEWARE:
    app.add_middleware(BaseHTTPMiddleware, dispatch=m)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

###############
# DATASET API
###############

app.include_router(datasets.router, prefix="/datasets")
app.include_router(dataset.router, prefix="/dataset")

###############
# SHARE API
###############

app.include_router(shares.router, prefix="/share")

###############
# DATALOAD API
###############

app.include_router(datasources.router, prefix="/datasource")
app.include_router(dataloads.router, prefix="/dataload")

###############
# THRESHOLD API
###############

app.include_router(thresholds.router, prefix="/threshold")

###############
# HEALTH API
###############

app.include_router(health.router, prefix="")


#######################
# OPENAPI Documentation
#######################


tags_metadata = [
    {"name": "Datasets", "description": datasets.__doc__},
    {"name": "Shares", "description": shares.__doc__},
    {"name": "Datasources", "description": datasources.__doc__},
    {"name": "Dataloads", "description": dataloads.__doc__},
    {"name": "Thresholds", "description": thresholds.__doc__},
    {"name": "Health", "description": health.__doc__},
]


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title="Analytics Data API",
        version="0.1.0",
        description="Manage datasets, fill them from datasources and share them.",
        routes=app.routes,
    )

    openapi_schema["tags"] = tags_metadata
    openapi_schema["x-tagGroups"] = [
        {"name": "Dataset API", "tags": ["Datasets", "Shares", "Thresholds"]},
        {"name": "Dataload API", "tags": ["Datasources", "Dataloads"]},
        {"name": "Health API", "tags": ["Health"]},
    ]

    app.openapi_schema = openapi_schema

    return app.openapi_schema


app.openapi = custom_openapi

if __name__ == "__main__":
    import uvicorn

    logger.setLevel(logging.DEBUG)
    uvicorn.run(app, host="0.0.0.0", port=8888, log_level="info")
else:
    logger.setLevel(gunicorn_logger.level)
