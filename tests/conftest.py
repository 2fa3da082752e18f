import contextlib
import os
import tempfile

# Settings are read on import, the environment must be ready before that
DB_DIR = tempfile.mkdtemp(prefix="analytics-api-test-")
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(DB_DIR, 'test.db')}"
os.environ["FILE_STORAGE_ROOT"] = os.path.join(os.path.dirname(__file__), "fixtures")
os.environ["HOST_API_URL"] = "http://host.test"
os.environ["GITHUB_API_URL"] = "https://github.test"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from asgi_lifespan import LifespanManager  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from analytics_api import application  # noqa: E402
from analytics_api.authentication.token import get_user  # noqa: E402
from analytics_api.models.orm.activity import Activity  # noqa: E402,F401
from analytics_api.models.orm.base import Model  # noqa: E402
from analytics_api.models.orm.data import DataRow  # noqa: E402,F401
from analytics_api.models.orm.dataloads import Dataload  # noqa: E402,F401
from analytics_api.models.orm.datasets import Dataset  # noqa: E402,F401
from analytics_api.models.orm.shares import Share  # noqa: E402,F401
from analytics_api.models.orm.thresholds import Threshold  # noqa: E402,F401
from analytics_api.models.pydantic.authentication import User  # noqa: E402

from tests import USER_1  # noqa: E402

pytest.register_assert_rewrite("tests.utils")


async def _reset_tables() -> None:
    async with application.WRITE_ENGINE.begin() as conn:
        await conn.run_sync(Model.metadata.drop_all)
        await conn.run_sync(Model.metadata.create_all)


@pytest_asyncio.fixture
async def db():
    """Fresh tables for tests calling the crud layer directly."""
    await application.connect()
    await _reset_tables()
    yield
    await application.disconnect()


@pytest_asyncio.fixture
async def app():
    from analytics_api.main import app

    async with LifespanManager(app):
        await _reset_tables()
        yield app

    app.dependency_overrides = {}


@contextlib.asynccontextmanager
async def client_with_user(app, user: User):
    app.dependency_overrides[get_user] = lambda: user
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as http_client:
        yield http_client


@pytest_asyncio.fixture
async def async_client(app):
    """Async test client authenticated as USER_1."""
    async with client_with_user(app, USER_1) as http_client:
        yield http_client
