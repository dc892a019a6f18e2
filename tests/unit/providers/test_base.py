"""Unit tests for the metadata provider base.

Tests for URL parsing, auth token parsing and response status mapping.
"""

# pyright: reportPrivateUsage=false

import httpx
import pytest
from pkgcollection.providers.base import (
    AuthTokenKey,
    AuthTokenType,
    GitURL,
    parse_auth_token,
    parse_auth_tokens,
)
from pkgcollection.providers.errors import (
    InvalidAuthTokenError,
    InvalidGitURLError,
    InvalidResponseError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitExceededError,
)
from pkgcollection.providers.github import GitHubMetadataProvider
from pkgcollection.providers.http import HTTPClient

API_URL = "https://api.github.com/repos/a/b"


class TestGitURLParse:
    """Tests for GitURL.parse."""

    @pytest.mark.parametrize(
        ("url", "host", "owner", "repository"),
        [
            ("https://github.com/apple/swift-nio.git", "github.com", "apple", "swift-nio"),
            ("https://github.com/apple/swift-nio", "github.com", "apple", "swift-nio"),
            ("https://github.com/apple/swift-nio/", "github.com", "apple", "swift-nio"),
            ("git@github.com:apple/swift-nio.git", "github.com", "apple", "swift-nio"),
            ("ssh://git@GitHub.com:22/apple/swift-nio.git", "github.com", "apple", "swift-nio"),
            ("git://github.com/apple/swift-nio", "github.com", "apple", "swift-nio"),
            ("https://gitlab.com/group/sub/project.git", "gitlab.com", "group/sub", "project"),
        ],
    )
    def test_valid(self, url: str, host: str, owner: str, repository: str) -> None:
        """Supported URL forms are split into host, owner and repository."""
        assert GitURL.parse(url) == GitURL(host=host, owner=owner, repository=repository)

    @pytest.mark.parametrize(
        "url",
        ["", "not a url", "https://github.com/onlyowner", "https://github.com/"],
    )
    def test_invalid(self, url: str) -> None:
        """Malformed URLs raise InvalidGitURLError."""
        with pytest.raises(InvalidGitURLError):
            GitURL.parse(url)


class TestParseAuthToken:
    """Tests for auth token parsing."""

    def test_valid(self) -> None:
        """type:host:token is split into key and token."""
        assert parse_auth_token("github:GitHub.com:abc") == (
            AuthTokenKey(AuthTokenType.GITHUB, "github.com"),
            "abc",
        )

    def test_token_may_contain_colons(self) -> None:
        """Only the first two colons separate fields."""
        parsed = parse_auth_token("gitlab:gitlab.example.com:a:b")

        assert parsed is not None
        assert parsed[1] == "a:b"

    @pytest.mark.parametrize("text", ["github:github.com", "bitbucket:host:x", "github::x", ""])
    def test_malformed(self, text: str) -> None:
        """Malformed or unknown-type strings are rejected."""
        assert parse_auth_token(text) is None

    def test_parse_many_skips_malformed(self) -> None:
        """Malformed entries are skipped and later entries win."""
        tokens = parse_auth_tokens(
            ["github:github.com:one", "broken", "github:github.com:two", "gitlab:gitlab.com:x"]
        )

        assert tokens == {
            AuthTokenKey(AuthTokenType.GITHUB, "github.com"): "two",
            AuthTokenKey(AuthTokenType.GITLAB, "gitlab.com"): "x",
        }


def check(status: int, headers: dict[str, str] | None = None, has_token: bool = False) -> None:
    """Run the status mapping of the GitHub provider on a response."""
    provider = GitHubMetadataProvider(HTTPClient())
    response = httpx.Response(status, headers=headers or {})
    provider._check_response(API_URL, response, has_token=has_token)


class TestCheckResponse:
    """Tests for response status mapping."""

    def test_ok(self) -> None:
        """200 passes."""
        check(200)

    def test_rate_limit_takes_precedence(self) -> None:
        """A zero remaining counter fails regardless of status."""
        headers = {"X-RateLimit-Remaining": "0", "X-RateLimit-Limit": "60"}

        with pytest.raises(RateLimitExceededError) as exc_info:
            check(200, headers)

        assert exc_info.value.limit == 60
        assert exc_info.value.remaining == 0

    def test_rate_limit_before_auth(self) -> None:
        """The rate-limit check comes before the 401 check."""
        with pytest.raises(RateLimitExceededError):
            check(401, {"X-RateLimit-Remaining": "0"}, has_token=True)

    def test_remaining_not_zero(self) -> None:
        """A non-zero remaining counter is not an error."""
        check(200, {"X-RateLimit-Remaining": "59"})

    def test_unauthorized_with_token(self) -> None:
        """401 with a token means the token is invalid."""
        with pytest.raises(InvalidAuthTokenError):
            check(401, has_token=True)

    def test_unauthorized_without_token(self) -> None:
        """401 without a token means permission denied."""
        with pytest.raises(PermissionDeniedError):
            check(401)

    def test_forbidden(self) -> None:
        """403 means permission denied."""
        with pytest.raises(PermissionDeniedError):
            check(403, has_token=True)

    def test_not_found(self) -> None:
        """404 means not found."""
        with pytest.raises(NotFoundError, match="Repository not found"):
            check(404)

    @pytest.mark.parametrize("status", [201, 302, 500])
    def test_other_status(self, status: int) -> None:
        """Any other status is an invalid response."""
        with pytest.raises(InvalidResponseError) as exc_info:
            check(status)

        assert exc_info.value.status_code == status
