import json
from pathlib import Path
from typing import Optional

from starlette.config import Config
from starlette.datastructures import Secret

from ..models.pydantic.database import DatabaseURL

# Read .env file, if exists
p: Path = Path(__file__).parents[2] / ".env"
config: Config = Config(p if p.exists() else None)

empty_db_secret = {
    "dbname": None,
    "host": "localhost",
    "password": None,  # pragma: allowlist secret
    "port": 5432,
    "username": None,
}

empty_sa_secret = {"token": None}

# Secrets are injected as whole JSON objects
DB_WRITER_SECRET = json.loads(
    config("DB_WRITER_SECRET", cast=str, default=json.dumps(empty_db_secret))
)
DB_READER_SECRET = json.loads(
    config("DB_READER_SECRET", cast=str, default=json.dumps(empty_db_secret))
)

SERVICE_ACCOUNT_SECRET = json.loads(
    config("SERVICE_ACCOUNT_SECRET", cast=str, default=json.dumps(empty_sa_secret))
)

ENV = config("ENV", cast=str, default="dev")

READER_USERNAME: Optional[str] = config(
    "DB_USER_RO", cast=str, default=DB_READER_SECRET["username"]
)
READER_PASSWORD: Optional[Secret] = config(
    "DB_PASSWORD_RO", cast=Secret, default=DB_READER_SECRET["password"]
)
READER_HOST: str = config("DB_HOST_RO", cast=str, default=DB_READER_SECRET["host"])
READER_PORT: int = config("DB_PORT_RO", cast=int, default=DB_READER_SECRET["port"])
READER_DBNAME = config("DATABASE_RO", cast=str, default=DB_READER_SECRET["dbname"])

WRITER_USERNAME: Optional[str] = config(
    "DB_USER", cast=str, default=DB_WRITER_SECRET["username"]
)
WRITER_PASSWORD: Optional[Secret] = config(
    "DB_PASSWORD", cast=Secret, default=DB_WRITER_SECRET["password"]
)
WRITER_HOST: str = config("DB_HOST", cast=str, default=DB_WRITER_SECRET["host"])
WRITER_PORT: int = config("DB_PORT", cast=int, default=DB_WRITER_SECRET["port"])
WRITER_DBNAME = config("DATABASE", cast=str, default=DB_WRITER_SECRET["dbname"])

DATABASE_CONFIG: DatabaseURL = DatabaseURL(
    drivername="postgresql+asyncpg",
    username=READER_USERNAME,
    password=READER_PASSWORD,
    host=READER_HOST,
    port=READER_PORT,
    database=READER_DBNAME or "analytics",
)

WRITE_DATABASE_CONFIG: DatabaseURL = DatabaseURL(
    drivername="postgresql+asyncpg",
    username=WRITER_USERNAME,
    password=WRITER_PASSWORD,
    host=WRITER_HOST,
    port=WRITER_PORT,
    database=WRITER_DBNAME or "analytics",
)

ALEMBIC_CONFIG: DatabaseURL = DatabaseURL(
    drivername="postgresql+psycopg2",
    username=WRITER_USERNAME,
    password=WRITER_PASSWORD,
    host=WRITER_HOST,
    port=WRITER_PORT,
    database=WRITER_DBNAME or "analytics",
)

# Single connection string for both pools, mostly for local runs and tests
DATABASE_URL: Optional[str] = config("DATABASE_URL", cast=str, default=None)

SQL_REQUEST_TIMEOUT = 58

HOST_API_URL = config("HOST_API_URL", cast=str, default="http://localhost")
SERVICE_ACCOUNT_TOKEN = config(
    "SERVICE_ACCOUNT_TOKEN", cast=str, default=SERVICE_ACCOUNT_SECRET["token"]
)

FILE_STORAGE_ROOT: str = config("FILE_STORAGE_ROOT", cast=str, default="/data/files")
GITHUB_API_URL: str = config(
    "GITHUB_API_URL", cast=str, default="https://api.github.com"
)
HTTP_TIMEOUT: float = config("HTTP_TIMEOUT", cast=float, default=10.0)

DEDUPLICATE_SHARED_DATASETS: bool = config(
    "DEDUPLICATE_SHARED_DATASETS", cast=bool, default=False
)

DATASOURCE_ENTRY_POINT_GROUP: str = config(
    "DATASOURCE_ENTRY_POINT_GROUP", cast=str, default="analytics_api.datasources"
)

SHARE_TOKEN_LENGTH = 15
