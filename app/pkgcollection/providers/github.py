"""GitHub metadata provider.

Queries the GitHub REST API (``https://api.<host>/repos/<owner>/<repo>``).
After the repository request succeeds, the README and license endpoints are
queried concurrently; their failures leave the matching fields empty.
"""

import asyncio
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from pkgcollection.models.collection import License
from pkgcollection.models.metadata import PackageBasicMetadata
from pkgcollection.providers.base import AuthTokenType, GitURL, MetadataProvider
from pkgcollection.providers.errors import InvalidResponseError, MetadataProviderError

logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)

# Preview media type that includes repository topics
_REPOSITORY_MEDIA_TYPE = "application/vnd.github.mercy-preview+json"
_V3_MEDIA_TYPE = "application/vnd.github.v3+json"


class _GitHubModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class _Repository(_GitHubModel):
    name: str
    full_name: str
    description: str | None = None
    topics: list[str] | None = None


class _Readme(_GitHubModel):
    download_url: str


class _LicenseInfo(_GitHubModel):
    name: str | None = None
    spdx_id: str | None = None


class _License(_GitHubModel):
    download_url: str
    license: _LicenseInfo


class GitHubMetadataProvider(MetadataProvider):
    """Metadata provider for GitHub and GitHub Enterprise hosts."""

    kind = AuthTokenType.GITHUB
    rate_limit_header = "X-RateLimit-Limit"
    rate_limit_remaining_header = "X-RateLimit-Remaining"
    accept = _REPOSITORY_MEDIA_TYPE

    def api_url(self, git_url: GitURL) -> str:
        """Return ``https://api.<host>/repos/<owner>/<repo>``."""
        return f"https://api.{git_url.host}/repos/{git_url.owner}/{git_url.repository}"

    def authorization(self, token: str) -> str:
        """Return the "token" Authorization scheme."""
        return f"token {token}"

    async def _build_metadata(
        self,
        git_url: GitURL,
        body: dict[str, Any],
        token: str | None,
    ) -> PackageBasicMetadata:
        base_url = self.api_url(git_url)
        try:
            repository = _Repository.model_validate(body)
        except ValidationError as e:
            raise InvalidResponseError(base_url, f"Unexpected repository body: {e}", 200) from e

        readme, license_body = await asyncio.gather(
            self._get_optional(f"{base_url}/readme", token, _Readme),
            self._get_optional(f"{base_url}/license", token, _License),
        )

        license_ = None
        if license_body is not None:
            license_ = License(
                name=license_body.license.spdx_id or license_body.license.name,
                url=license_body.download_url,
            )

        return PackageBasicMetadata(
            summary=repository.description,
            keywords=repository.topics,
            readme_url=readme.download_url if readme is not None else None,
            license=license_,
        )

    async def _get_optional(
        self,
        url: str,
        token: str | None,
        model: type[_ModelT],
    ) -> _ModelT | None:
        """Fetch a dependent resource, returning None on any provider failure."""
        try:
            body = await self._get_json(url, token, accept=_V3_MEDIA_TYPE)
            return model.model_validate(body)
        except ValidationError as e:
            logger.debug("Ignoring unexpected body from %s: %s", url, e)
        except MetadataProviderError as e:
            logger.debug("Ignoring failed request to %s: %s", url, e)
        return None
