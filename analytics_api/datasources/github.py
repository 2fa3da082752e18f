from typing import Any, List, Mapping

from ..errors import UpstreamFailureError
from ..models.enum.datasources import DatasourceType
from ..models.pydantic.datasources import DatasourceResult, TemplateField
from ..settings.globals import GITHUB_API_URL
from .base import TIMESTAMP_FIELD, Datasource, fetch, int_option, require_option


class Github(Datasource):
    """Download counts of the releases of a GitHub repository."""

    id = DatasourceType.git
    name = "GitHub"

    def __init__(self, api_url: str = GITHUB_API_URL):
        self.api_url = api_url.rstrip("/")

    def template(self) -> List[TemplateField]:
        return [
            TemplateField(id="user", name="GitHub username", placeholder="username"),
            TemplateField(id="repository", name="Repository", placeholder="repository"),
            TemplateField(id="limit", name="Limit", placeholder="Number of releases"),
            TIMESTAMP_FIELD,
        ]

    async def read_data(self, options: Mapping[str, Any]) -> DatasourceResult:
        user = require_option(options, "user")
        repository = require_option(options, "repository")
        limit = int_option(options, "limit")

        response = await fetch(f"{self.api_url}/repos/{user}/{repository}/releases")
        try:
            releases = response.json()
        except ValueError:
            raise UpstreamFailureError(f"GitHub did not return valid JSON for {user}/{repository}")
        if not isinstance(releases, list):
            raise UpstreamFailureError(f"Unexpected answer from GitHub: {response.text[:200]}")

        data = list()
        for release in releases[:limit]:
            downloads = sum(
                asset.get("download_count", 0) for asset in release.get("assets", [])
            )
            data.append([release.get("tag_name") or release.get("name"), downloads])

        return DatasourceResult(
            header=["Version", "Downloads"], data=data, rawdata=response.text
        )
