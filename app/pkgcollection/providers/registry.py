"""Selection of the metadata provider for a repository host.

Hosts map to provider kinds: github.com and gitlab.com are known, and every
host named by an auth token is added with the token's kind, which covers
self-hosted instances.
"""

import logging
from collections.abc import Mapping

from pkgcollection.models.metadata import PackageBasicMetadata
from pkgcollection.providers.base import AuthTokenKey, AuthTokenType, GitURL, MetadataProvider
from pkgcollection.providers.errors import UnsupportedHostError
from pkgcollection.providers.github import GitHubMetadataProvider
from pkgcollection.providers.gitlab import GitLabMetadataProvider
from pkgcollection.providers.http import HTTPClient

logger = logging.getLogger(__name__)

# Hosts known without configuration
DEFAULT_HOSTS: dict[str, AuthTokenType] = {
    "github.com": AuthTokenType.GITHUB,
    "gitlab.com": AuthTokenType.GITLAB,
}

_PROVIDER_CLASSES: dict[AuthTokenType, type[MetadataProvider]] = {
    AuthTokenType.GITHUB: GitHubMetadataProvider,
    AuthTokenType.GITLAB: GitLabMetadataProvider,
}


class MetadataProviderRegistry:
    """Dispatches metadata requests to the provider for the repository host.

    The registry itself satisfies the provider contract (``fetch``), so the
    aggregator does not need to know which service hosts a package.

    Args:
        client: HTTP client shared by all providers.
        auth_tokens: Auth tokens by (kind, host).
    """

    def __init__(
        self,
        client: HTTPClient,
        auth_tokens: Mapping[AuthTokenKey, str] | None = None,
    ) -> None:
        tokens = dict(auth_tokens or {})
        self._hosts = dict(DEFAULT_HOSTS)
        for key in tokens:
            self._hosts[key.host] = key.kind
        self._providers: dict[AuthTokenType, MetadataProvider] = {
            kind: provider_class(client, tokens)
            for kind, provider_class in _PROVIDER_CLASSES.items()
        }

    def provider_for(self, host: str) -> MetadataProvider:
        """Return the provider serving a host.

        Raises:
            UnsupportedHostError: If the host is not known.
        """
        kind = self._hosts.get(host.lower())
        if kind is None:
            raise UnsupportedHostError(host)
        return self._providers[kind]

    async def fetch(self, repository_url: str) -> PackageBasicMetadata:
        """Fetch metadata through the provider for the repository host.

        Raises:
            InvalidGitURLError: If the URL is malformed.
            UnsupportedHostError: If no provider serves the host.
            MetadataProviderError: If the request fails.
        """
        git_url = GitURL.parse(repository_url)
        provider = self.provider_for(git_url.host)
        logger.debug("Fetching metadata for %s from %s", repository_url, git_url.host)
        return await provider.fetch(repository_url)
