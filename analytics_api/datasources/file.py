from pathlib import Path
from typing import Any, List, Mapping

from starlette.concurrency import run_in_threadpool

from ..errors import DatasourceValidationError
from ..models.enum.datasources import DatasourceType
from ..models.pydantic.datasources import DatasourceResult, TemplateField
from ..settings.globals import FILE_STORAGE_ROOT
from .base import TIMESTAMP_FIELD, Datasource, parse_csv, require_option


class File(Datasource):
    """CSV file from the platform's file storage."""

    id = DatasourceType.file
    name = "Local file"

    def __init__(self, root: str = FILE_STORAGE_ROOT):
        self.root = Path(root)

    def template(self) -> List[TemplateField]:
        return [
            TemplateField(id="link", name="File", placeholder="path/to/file.csv"),
            TemplateField(
                id="columns",
                name="Select columns",
                placeholder="e.g. 1,2,4 or leave empty",
            ),
            TemplateField(id="offset", name="Ignore leading rows", placeholder="0"),
            TIMESTAMP_FIELD,
        ]

    def resolve(self, link: str) -> Path:
        root = self.root.resolve()
        path = (root / link.lstrip("/")).resolve()
        if not path.is_relative_to(root):
            raise DatasourceValidationError(f"File {link} is outside of the file storage")
        return path

    async def read_data(self, options: Mapping[str, Any]) -> DatasourceResult:
        path = self.resolve(require_option(options, "link"))
        text = await run_in_threadpool(path.read_text, encoding="utf-8-sig")
        return parse_csv(text, options)
