"""Exceptions raised by remote metadata providers."""


class MetadataProviderError(Exception):
    """Base exception for metadata provider errors."""


class InvalidGitURLError(MetadataProviderError):
    """Raised when a repository URL cannot be split into host, owner and name."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Invalid git URL: {url}")


class UnsupportedHostError(MetadataProviderError):
    """Raised when no provider is registered for a repository host."""

    def __init__(self, host: str) -> None:
        self.host = host
        super().__init__(f"No metadata provider for host: {host}")


class InvalidResponseError(MetadataProviderError):
    """Raised when the hosting API answers with an unexpected status or body."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"Invalid response from {url}: {reason}")


class PermissionDeniedError(MetadataProviderError):
    """Raised when the hosting API refuses access to the repository."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Permission denied: {url}")


class InvalidAuthTokenError(MetadataProviderError):
    """Raised when the hosting API rejects the configured auth token."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Invalid auth token for {url}")


class RateLimitExceededError(MetadataProviderError):
    """Raised when the hosting API reports no remaining requests."""

    def __init__(self, url: str, limit: int | None, remaining: int) -> None:
        self.url = url
        self.limit = limit
        self.remaining = remaining
        super().__init__(f"Rate limit exceeded for {url} (limit={limit}, remaining={remaining})")


class NotFoundError(MetadataProviderError):
    """Raised when the repository does not exist on the hosting service."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Repository not found: {url}")


class RequestFailedError(MetadataProviderError):
    """Raised when a request keeps failing at the transport level."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Request to {url} failed: {reason}")


class CircuitOpenError(MetadataProviderError):
    """Raised when requests to a host are shed because it keeps failing."""

    def __init__(self, host: str) -> None:
        self.host = host
        super().__init__(f"Too many recent errors for {host}, request not sent")
