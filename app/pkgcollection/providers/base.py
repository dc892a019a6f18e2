"""Abstract base class for remote metadata providers.

A provider fetches the description, topics, README URL and license of a
repository from its hosting service's REST API. Hosting services differ in
API URL shape, authorization scheme and rate-limit headers; those are the
hooks each provider implements.
"""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Protocol

import httpx

from pkgcollection.models.metadata import PackageBasicMetadata
from pkgcollection.providers.errors import (
    InvalidAuthTokenError,
    InvalidGitURLError,
    InvalidResponseError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitExceededError,
)
from pkgcollection.providers.http import HTTPClient

logger = logging.getLogger(__name__)

# SSH ("git@host:owner/repo.git"), ssh://, git:// and http(s):// forms.
# The owner may span several path segments (nested groups).
_GIT_URL_PATTERN = re.compile(
    r"^(?:(?:https?|ssh|git)://)?"
    r"(?:[^@/]+@)?"
    r"(?P<host>[^/:@]+)"
    r"(?::\d+)?"
    r"[:/]"
    r"(?P<owner>[^:/][^:]*?)"
    r"/(?P<repository>[^/:]+?)"
    r"(?:\.git)?/?$",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class GitURL:
    """Repository URL split into its parts.

    Attributes:
        host: Hosting service host name (e.g. github.com).
        owner: Owner, user or (nested) group path.
        repository: Repository name without ".git".
    """

    host: str
    owner: str
    repository: str

    @classmethod
    def parse(cls, url: str) -> "GitURL":
        """Split a repository URL into host, owner and repository.

        Args:
            url: Repository URL in SSH or HTTP(S) form.

        Returns:
            Parsed GitURL.

        Raises:
            InvalidGitURLError: If the URL does not have the expected shape.

        Example:
            >>> GitURL.parse("git@github.com:apple/swift-nio.git")
            GitURL(host='github.com', owner='apple', repository='swift-nio')
        """
        match = _GIT_URL_PATTERN.match(url.strip())
        if match is None:
            raise InvalidGitURLError(url)
        return cls(
            host=match.group("host").lower(),
            owner=match.group("owner"),
            repository=match.group("repository"),
        )


class AuthTokenType(str, Enum):
    """Hosting service kinds an auth token can be issued for."""

    GITHUB = "github"
    GITLAB = "gitlab"


@dataclass(frozen=True, slots=True)
class AuthTokenKey:
    """Lookup key of an auth token: service kind and host."""

    kind: AuthTokenType
    host: str


def parse_auth_token(text: str) -> tuple[AuthTokenKey, str] | None:
    """Parse a "type:host:token" string.

    Args:
        text: Token string, e.g. "github:github.com:ghp_xxx".

    Returns:
        (key, token) tuple, or None if the string is malformed or names an
        unknown type.
    """
    parts = text.split(":", 2)
    if len(parts) != 3 or not all(parts):
        return None
    kind, host, token = parts
    try:
        token_type = AuthTokenType(kind.lower())
    except ValueError:
        return None
    return AuthTokenKey(token_type, host.lower()), token


def parse_auth_tokens(texts: list[str]) -> dict[AuthTokenKey, str]:
    """Parse token strings, skipping malformed ones with a warning.

    Later entries win when two entries share a key.

    Args:
        texts: Token strings in "type:host:token" form.

    Returns:
        Mapping from key to token.
    """
    tokens: dict[AuthTokenKey, str] = {}
    for text in texts:
        parsed = parse_auth_token(text)
        if parsed is None:
            # Never log the token itself
            logger.warning("Ignoring malformed auth token (expected type:host:token)")
            continue
        key, token = parsed
        tokens[key] = token
    return tokens


class MetadataSource(Protocol):
    """Anything that can fetch metadata for a repository URL."""

    async def fetch(self, repository_url: str) -> PackageBasicMetadata: ...


def _int_header(response: httpx.Response, name: str) -> int | None:
    value = response.headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class MetadataProvider(ABC):
    """Abstract base class for all metadata providers.

    ``fetch`` parses the repository URL, sends the main request, maps the
    response status and hands the decoded body to ``_build_metadata``.

    Args:
        client: HTTP client applying the request policy.
        auth_tokens: Auth tokens by (kind, host). Only tokens of this
            provider's kind are used.

    Example:
        >>> provider = GitHubMetadataProvider(client)
        >>> metadata = await provider.fetch("https://github.com/apple/swift-nio.git")
        >>> metadata.summary
        'Event-driven network application framework...'
    """

    #: Token kind this provider authorizes with
    kind: ClassVar[AuthTokenType]

    #: Response header carrying the request limit
    rate_limit_header: ClassVar[str]

    #: Response header carrying the remaining request count
    rate_limit_remaining_header: ClassVar[str]

    #: Accept header for the main request
    accept: ClassVar[str] = "application/json"

    def __init__(
        self,
        client: HTTPClient,
        auth_tokens: Mapping[AuthTokenKey, str] | None = None,
    ) -> None:
        self._client = client
        self._auth_tokens = dict(auth_tokens or {})

    @abstractmethod
    def api_url(self, git_url: GitURL) -> str:
        """Return the API URL of the repository's main metadata endpoint."""

    @abstractmethod
    def authorization(self, token: str) -> str:
        """Return the Authorization header value for a token."""

    @abstractmethod
    async def _build_metadata(
        self,
        git_url: GitURL,
        body: dict[str, Any],
        token: str | None,
    ) -> PackageBasicMetadata:
        """Build the result from the main response body.

        Args:
            git_url: Parsed repository URL.
            body: Decoded JSON body of the main response.
            token: Auth token used for the main request, if any.

        Raises:
            InvalidResponseError: If the body lacks required fields.
        """

    async def fetch(self, repository_url: str) -> PackageBasicMetadata:
        """Fetch metadata of a repository.

        Args:
            repository_url: Repository URL in SSH or HTTP(S) form.

        Returns:
            PackageBasicMetadata; fields the service does not provide are None.

        Raises:
            InvalidGitURLError: If the URL is malformed (no request is sent).
            MetadataProviderError: If the main request fails.
        """
        git_url = GitURL.parse(repository_url)
        token = self.token_for(git_url.host)
        body = await self._get_json(self.api_url(git_url), token, accept=self.accept)
        return await self._build_metadata(git_url, body, token)

    def token_for(self, host: str) -> str | None:
        """Return the auth token configured for a host, if any."""
        return self._auth_tokens.get(AuthTokenKey(self.kind, host.lower()))

    def _headers(self, token: str | None, accept: str) -> dict[str, str]:
        headers = {"Accept": accept}
        if token is not None:
            headers["Authorization"] = self.authorization(token)
        return headers

    async def _get_json(self, url: str, token: str | None, *, accept: str) -> dict[str, Any]:
        """Send a GET request and return the decoded JSON object body.

        Raises:
            MetadataProviderError: On a failed request or an error status.
            InvalidResponseError: If the body is not a JSON object.
        """
        response = await self._client.get(url, headers=self._headers(token, accept))
        self._check_response(url, response, has_token=token is not None)
        try:
            body = response.json()
        except ValueError as e:
            raise InvalidResponseError(url, "Body is not valid JSON", response.status_code) from e
        if not isinstance(body, dict):
            raise InvalidResponseError(url, "Body is not a JSON object", response.status_code)
        return body

    def _check_response(self, url: str, response: httpx.Response, *, has_token: bool) -> None:
        """Map a response status to an error.

        The rate-limit check comes first and applies to any status.

        Raises:
            RateLimitExceededError: If no requests remain.
            InvalidAuthTokenError: On 401 with a token.
            PermissionDeniedError: On 401 without a token, or on 403.
            NotFoundError: On 404.
            InvalidResponseError: On any other non-200 status.
        """
        remaining = _int_header(response, self.rate_limit_remaining_header)
        if remaining == 0:
            limit = _int_header(response, self.rate_limit_header)
            raise RateLimitExceededError(url, limit, remaining)

        status = response.status_code
        if status == 401:
            if has_token:
                raise InvalidAuthTokenError(url)
            raise PermissionDeniedError(url)
        if status == 403:
            raise PermissionDeniedError(url)
        if status == 404:
            raise NotFoundError(url)
        if status != 200:
            raise InvalidResponseError(url, f"Invalid status code: {status}", status)
