"""Common contract of all datasources.

A datasource describes the options it needs as a template and reads raw
rows from its source given the values the user entered for that
template.
"""
import csv
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from httpx import AsyncClient, BasicAuth, HTTPError
from httpx import Response as HTTPXResponse

from ..errors import DatasourceValidationError, UpstreamFailureError
from ..models.enum.datasources import TemplateFieldType
from ..models.pydantic.authentication import User
from ..models.pydantic.datasources import DatasourceResult, TemplateField
from ..settings.globals import HTTP_TIMEOUT

# Failures a datasource may raise while reading its source
UPSTREAM_ERRORS = (HTTPError, OSError, UnicodeDecodeError, UpstreamFailureError)

TIMESTAMP_FIELD = TemplateField(
    id="timestamp",
    name="Timestamp of data load",
    placeholder="false/true",
    type=TemplateFieldType.choice,
)


class Datasource(ABC):
    id: int
    name: str

    @abstractmethod
    def template(self) -> List[TemplateField]:
        ...

    @abstractmethod
    async def read_data(self, options: Mapping[str, Any]) -> DatasourceResult:
        ...

    async def authorize(self, options: Mapping[str, Any], user: User) -> None:
        """Raise UnauthorizedError if the user may not read with these
        options. Sources outside of this service are open to every user."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} name={self.name!r}>"


def require_option(options: Mapping[str, Any], key: str) -> str:
    value = options.get(key)
    if value is None or str(value).strip() == "":
        raise DatasourceValidationError(f"Option `{key}` is required")
    return str(value).strip()


def int_option(options: Mapping[str, Any], key: str, default: Optional[int] = None) -> Optional[int]:
    value = options.get(key)
    if value is None or str(value).strip() == "":
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        raise DatasourceValidationError(f"Option `{key}` must be an integer")
    if number < 0:
        raise DatasourceValidationError(f"Option `{key}` must not be negative")
    return number


def parse_columns(value: Any) -> List[int]:
    """Turn `1,3,4` into zero based column indexes."""
    if value is None or str(value).strip() == "":
        return list()
    try:
        columns = [int(c) - 1 for c in str(value).split(",") if c.strip()]
    except ValueError:
        raise DatasourceValidationError("Option `columns` must list column numbers, e.g. 1,2,4")
    if any(c < 0 for c in columns):
        raise DatasourceValidationError("Column numbers start at 1")
    return columns


def parse_csv(text: str, options: Mapping[str, Any]) -> DatasourceResult:
    """Parse delimited text. The first row after `offset` skipped rows is
    the header."""
    offset = int_option(options, "offset", 0) or 0
    columns = parse_columns(options.get("columns"))

    lines = text.splitlines()[offset:]
    # the delimiter is the most frequent candidate in the header line
    header_line = next((line for line in lines if line.strip()), "")
    delimiter = max(",;\t", key=header_line.count)
    rows = [row for row in csv.reader(lines, delimiter=delimiter) if row]

    if columns:
        try:
            rows = [[row[c] for c in columns] for row in rows]
        except IndexError:
            raise DatasourceValidationError("Selected column does not exist in file")

    header = rows[0] if rows else list()
    return DatasourceResult(header=header, data=rows[1:], rawdata=text)


async def fetch(url: str, auth: Optional[str] = None, **kwargs: Any) -> HTTPXResponse:
    """GET a resource, raising for unsuccessful status codes."""
    basic_auth: Optional[BasicAuth] = None
    if auth:
        user, _, password = auth.partition(":")
        basic_auth = BasicAuth(user, password)

    async with AsyncClient() as client:
        response: HTTPXResponse = await client.get(
            url, auth=basic_auth, timeout=HTTP_TIMEOUT, follow_redirects=True, **kwargs
        )
    response.raise_for_status()
    return response

