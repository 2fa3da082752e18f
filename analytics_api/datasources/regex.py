import re
from typing import Any, List, Mapping

from ..errors import DatasourceValidationError
from ..models.enum.datasources import DatasourceType
from ..models.pydantic.datasources import DatasourceResult, TemplateField
from .base import TIMESTAMP_FIELD, Datasource, fetch, int_option, require_option


class Regex(Datasource):
    """Values scraped from a web page with a regular expression.

    The expression needs two groups: the first one becomes the dimension,
    the second one the value.
    """

    id = DatasourceType.regex
    name = "HTML grabber"

    def template(self) -> List[TemplateField]:
        return [
            TemplateField(id="url", name="URL", placeholder="https://"),
            TemplateField(
                id="name", name="Data series description", placeholder="optional"
            ),
            TemplateField(
                id="regex",
                name="Valid regex",
                placeholder=r"e.g. <td>(\w+)</td><td>(\d+)</td>",
            ),
            TemplateField(id="limit", name="Limit", placeholder="Number of matches"),
            TIMESTAMP_FIELD,
        ]

    async def read_data(self, options: Mapping[str, Any]) -> DatasourceResult:
        url = require_option(options, "url")
        try:
            pattern = re.compile(require_option(options, "regex"), re.DOTALL)
        except re.error as e:
            raise DatasourceValidationError(f"Invalid regex: {e}")
        if pattern.groups != 2:
            raise DatasourceValidationError("The regex needs exactly two groups")
        limit = int_option(options, "limit")
        series = str(options.get("name") or "").strip()

        response = await fetch(url)
        matches = pattern.findall(response.text)[:limit]

        if series:
            data = [[series, dimension, value] for dimension, value in matches]
            header = ["Series", "Dimension", "Value"]
        else:
            data = [[dimension, value] for dimension, value in matches]
            header = ["Dimension", "Value"]

        return DatasourceResult(header=header, data=data, rawdata=response.text)
