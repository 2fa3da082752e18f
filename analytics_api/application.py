from contextvars import ContextVar
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.logger import logger
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine

from .settings.globals import (
    DATABASE_CONFIG,
    DATABASE_URL,
    SQL_REQUEST_TIMEOUT,
    WRITE_DATABASE_CONFIG,
)

# Set the current session using a ContextVar to assure
# that the correct connection is used during concurrent requests
CURRENT_SESSION: ContextVar = ContextVar("session")

WRITE_ENGINE: Optional[AsyncEngine] = None
READ_ENGINE: Optional[AsyncEngine] = None


app = FastAPI(title="Analytics Data API", redoc_url="/")


class ContextEngine(object):
    """Bind a database session to the current context.

    ``WRITE`` scopes use the write pool and commit on a clean exit, all
    other scopes use the read pool and never commit. Nested scopes reuse
    the session of the outermost one.
    """

    def __init__(self, method):
        self.method = method
        self.session: Optional[AsyncSession] = None
        self.token = None

    async def __aenter__(self):
        """initialize objects."""
        try:
            CURRENT_SESSION.get()
        except LookupError:
            engine = await self.get_engine(self.method)
            self.session = AsyncSession(engine, expire_on_commit=False)
            self.token = CURRENT_SESSION.set(self.session)

    async def __aexit__(self, _type, value, tb):
        """Uninitialize objects."""
        if self.session is None:
            return
        try:
            if self.method.upper() == "WRITE":
                if _type is None:
                    await self.session.commit()
                else:
                    await self.session.rollback()
            # read sessions are only closed, rows loaded in them stay usable
        finally:
            await self.session.close()
            CURRENT_SESSION.reset(self.token)

    @staticmethod
    async def get_engine(method: str) -> AsyncEngine:
        """Select the database connection depending on request method."""
        if method.upper() == "WRITE":
            logger.debug("Use write engine")
            engine = WRITE_ENGINE
        else:
            logger.debug("Use read engine")
            engine = READ_ENGINE
        if engine is None:
            raise RuntimeError("Database engines are not initialized")
        return engine


def db_session() -> AsyncSession:
    """Session of the enclosing ContextEngine."""
    try:
        return CURRENT_SESSION.get()
    except LookupError:
        raise RuntimeError("No session in context, wrap the call in a ContextEngine")


def _engine_options(url: Any, **pool_options) -> Dict[str, Any]:
    if make_url(str(url)).get_backend_name() == "postgresql":
        return pool_options
    return {}


async def connect() -> None:
    """Create the read and write connection pools."""

    global WRITE_ENGINE
    global READ_ENGINE

    write_url = DATABASE_URL or WRITE_DATABASE_CONFIG.url
    read_url = DATABASE_URL or DATABASE_CONFIG.url

    WRITE_ENGINE = create_async_engine(
        write_url, **_engine_options(write_url, pool_size=5, max_overflow=0)
    )
    logger.info(f"Database connection pool for write operation created: {WRITE_ENGINE.url!r}")
    READ_ENGINE = create_async_engine(
        read_url,
        **_engine_options(
            read_url,
            pool_size=10,
            max_overflow=0,
            connect_args={"command_timeout": SQL_REQUEST_TIMEOUT},
        ),
    )
    logger.info(f"Database connection pool for read operation created: {READ_ENGINE.url!r}")


async def disconnect() -> None:
    """Close the connection pools."""

    global WRITE_ENGINE
    global READ_ENGINE

    if WRITE_ENGINE:
        logger.info(f"Closing database connection for write operations {WRITE_ENGINE.url!r}")
        await WRITE_ENGINE.dispose()
        WRITE_ENGINE = None
    if READ_ENGINE:
        logger.info(f"Closing database connection for read operations {READ_ENGINE.url!r}")
        await READ_ENGINE.dispose()
        READ_ENGINE = None


@app.on_event("startup")
async def startup_event():
    """Initializing the database connections on startup."""
    await connect()


@app.on_event("shutdown")
async def shutdown_event():
    """Closing the database connections on shutdown."""
    await disconnect()
