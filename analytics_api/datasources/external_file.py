from typing import Any, List, Mapping

from ..models.enum.datasources import DatasourceType
from ..models.pydantic.datasources import DatasourceResult, TemplateField
from .base import TIMESTAMP_FIELD, Datasource, fetch, parse_csv, require_option


class ExternalFile(Datasource):
    """CSV file downloaded from any URL."""

    id = DatasourceType.external_file
    name = "External file"

    def template(self) -> List[TemplateField]:
        return [
            TemplateField(id="link", name="External URL", placeholder="https://"),
            TemplateField(
                id="columns",
                name="Select columns",
                placeholder="e.g. 1,2,4 or leave empty",
            ),
            TemplateField(id="offset", name="Ignore leading rows", placeholder="0"),
            TIMESTAMP_FIELD,
        ]

    async def read_data(self, options: Mapping[str, Any]) -> DatasourceResult:
        response = await fetch(require_option(options, "link"))
        return parse_csv(response.text, options)
