from typing import Any, List, Mapping

from ..errors import DatasourceValidationError, UpstreamFailureError
from ..models.enum.datasources import DatasourceType
from ..models.pydantic.datasources import DatasourceResult, TemplateField
from .base import TIMESTAMP_FIELD, Datasource, fetch, require_option


def extract_path(document: Any, path: str) -> Any:
    """Walk a `/` separated key path. Numeric parts index lists."""
    node = document
    for key in [k for k in path.split("/") if k]:
        if isinstance(node, list):
            try:
                node = node[int(key)]
            except (ValueError, IndexError):
                raise DatasourceValidationError(f"Path element {key} not found")
        elif isinstance(node, dict) and key in node:
            node = node[key]
        else:
            raise DatasourceValidationError(f"Path element {key} not found")
    return node


class Json(Datasource):
    """Values from a JSON document."""

    id = DatasourceType.json
    name = "JSON"

    def template(self) -> List[TemplateField]:
        return [
            TemplateField(id="url", name="URL", placeholder="https://"),
            TemplateField(id="auth", name="Authentication", placeholder="user:password"),
            TemplateField(
                id="path", name="Object path", placeholder="e.g. data/values"
            ),
            TIMESTAMP_FIELD,
        ]

    async def read_data(self, options: Mapping[str, Any]) -> DatasourceResult:
        url = require_option(options, "url")
        path = require_option(options, "path")
        auth = str(options.get("auth") or "").strip() or None

        response = await fetch(url, auth=auth)
        try:
            document = response.json()
        except ValueError:
            raise UpstreamFailureError(f"{url} did not return valid JSON")

        node = extract_path(document, path)
        label = path.rstrip("/").split("/")[-1]

        if isinstance(node, dict):
            data = [[str(key), value] for key, value in node.items()]
        elif isinstance(node, list):
            data = [
                list(item) if isinstance(item, (list, tuple)) else [label, item]
                for item in node
            ]
        else:
            data = [[label, node]]

        return DatasourceResult(
            header=["Dimension", "Value"], data=data, rawdata=response.text
        )
