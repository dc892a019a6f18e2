"""GitLab metadata provider.

Queries the GitLab REST API (``https://<host>/api/v4/projects/<path>``).
README and license details come with the project body, so one request is
enough.
"""

from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, ValidationError

from pkgcollection.models.collection import License
from pkgcollection.models.metadata import PackageBasicMetadata
from pkgcollection.providers.base import AuthTokenType, GitURL, MetadataProvider
from pkgcollection.providers.errors import InvalidResponseError


class _GitLabModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class _ProjectLicense(_GitLabModel):
    name: str | None = None
    nickname: str | None = None
    source_url: str | None = None


class _Project(_GitLabModel):
    name: str
    description: str | None = None
    topics: list[str] | None = None
    readme_url: str | None = None
    license_url: str | None = None
    license: _ProjectLicense | None = None


class GitLabMetadataProvider(MetadataProvider):
    """Metadata provider for GitLab.com and self-hosted GitLab instances."""

    kind = AuthTokenType.GITLAB
    rate_limit_header = "RateLimit-Limit"
    rate_limit_remaining_header = "RateLimit-Remaining"

    def api_url(self, git_url: GitURL) -> str:
        """Return ``https://<host>/api/v4/projects/<url-encoded path>?license=true``."""
        project_path = quote(f"{git_url.owner}/{git_url.repository}", safe="")
        return f"https://{git_url.host}/api/v4/projects/{project_path}?license=true"

    def authorization(self, token: str) -> str:
        """Return the "Bearer" Authorization scheme."""
        return f"Bearer {token}"

    async def _build_metadata(
        self,
        git_url: GitURL,
        body: dict[str, Any],
        token: str | None,
    ) -> PackageBasicMetadata:
        try:
            project = _Project.model_validate(body)
        except ValidationError as e:
            raise InvalidResponseError(
                self.api_url(git_url), f"Unexpected project body: {e}", 200
            ) from e

        license_: License | None = None
        if project.license is not None and project.license.source_url:
            license_ = License(name=project.license.name, url=project.license.source_url)
        elif project.license_url:
            license_ = License(name=None, url=project.license_url)

        return PackageBasicMetadata(
            summary=project.description,
            keywords=project.topics,
            readme_url=project.readme_url,
            license=license_,
        )
