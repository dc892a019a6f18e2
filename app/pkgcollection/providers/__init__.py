"""Remote metadata providers for source-hosting services."""

from pkgcollection.providers.base import (
    AuthTokenKey,
    AuthTokenType,
    GitURL,
    MetadataProvider,
    MetadataSource,
    parse_auth_token,
    parse_auth_tokens,
)
from pkgcollection.providers.errors import (
    CircuitOpenError,
    InvalidAuthTokenError,
    InvalidGitURLError,
    InvalidResponseError,
    MetadataProviderError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitExceededError,
    RequestFailedError,
    UnsupportedHostError,
)
from pkgcollection.providers.github import GitHubMetadataProvider
from pkgcollection.providers.gitlab import GitLabMetadataProvider
from pkgcollection.providers.http import CircuitBreaker, HTTPClient
from pkgcollection.providers.registry import MetadataProviderRegistry

__all__ = [
    "AuthTokenKey",
    "AuthTokenType",
    "CircuitBreaker",
    "CircuitOpenError",
    "GitHubMetadataProvider",
    "GitLabMetadataProvider",
    "GitURL",
    "HTTPClient",
    "InvalidAuthTokenError",
    "InvalidGitURLError",
    "InvalidResponseError",
    "MetadataProvider",
    "MetadataProviderError",
    "MetadataProviderRegistry",
    "MetadataSource",
    "NotFoundError",
    "PermissionDeniedError",
    "RateLimitExceededError",
    "RequestFailedError",
    "UnsupportedHostError",
    "parse_auth_token",
    "parse_auth_tokens",
]
