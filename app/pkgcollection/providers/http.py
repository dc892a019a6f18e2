"""HTTP request policy for hosting-service API calls.

Requests are retried with exponential backoff on transport errors and 5xx
responses. A per-host circuit breaker sheds requests to a host that keeps
failing, without touching the network.
"""

import asyncio
import logging
import time
from collections import deque
from collections.abc import Awaitable, Callable

import httpx

from pkgcollection.core.config import HTTPConfig
from pkgcollection.providers.errors import CircuitOpenError, RequestFailedError

logger = logging.getLogger(__name__)


class CircuitBreaker:
    """Counts recent errors per host.

    The circuit for a host is open while at least ``max_errors`` errors were
    recorded within the last ``max_age`` seconds.

    Args:
        max_errors: Error count that opens the circuit.
        max_age: Sliding window length in seconds.
        clock: Monotonic time source.
    """

    def __init__(
        self,
        max_errors: int,
        max_age: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_errors = max_errors
        self._max_age = max_age
        self._clock = clock
        self._errors: dict[str, deque[float]] = {}

    def _recent(self, host: str) -> deque[float]:
        errors = self._errors.setdefault(host, deque())
        cutoff = self._clock() - self._max_age
        while errors and errors[0] <= cutoff:
            errors.popleft()
        return errors

    def is_open(self, host: str) -> bool:
        """Check whether requests to a host should be shed."""
        return len(self._recent(host)) >= self._max_errors

    def record_error(self, host: str) -> None:
        """Record a failed request to a host."""
        self._recent(host).append(self._clock())


class HTTPClient:
    """Async HTTP client applying timeout, retry and circuit breaking.

    Args:
        config: Request policy. Defaults to HTTPConfig().
        transport: Transport override, mainly for tests (httpx.MockTransport).
        sleep: Coroutine used for backoff delays.
        clock: Monotonic time source for the circuit breaker.

    Example:
        >>> async with HTTPClient() as client:
        ...     response = await client.get("https://api.github.com/repos/a/b")
    """

    def __init__(
        self,
        config: HTTPConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or HTTPConfig()
        self._sleep = sleep
        self._breaker = CircuitBreaker(
            self._config.circuit_breaker_max_errors,
            self._config.circuit_breaker_age_seconds,
            clock,
        )
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._config.timeout_seconds),
            transport=transport,
            follow_redirects=True,
        )

    async def get(self, url: str, headers: dict[str, str] | None = None) -> httpx.Response:
        """Send a GET request under the retry and circuit-breaker policy.

        A 5xx response that survives all attempts is returned as is, so that
        callers map it like any other unexpected status.

        Args:
            url: Request URL.
            headers: Extra request headers.

        Returns:
            The final response.

        Raises:
            CircuitOpenError: If the circuit for the URL's host is open.
            RequestFailedError: If every attempt failed at the transport level.
        """
        host = httpx.URL(url).host
        delay = self._config.base_delay_seconds
        attempts = self._config.max_attempts

        for attempt in range(1, attempts + 1):
            if self._breaker.is_open(host):
                raise CircuitOpenError(host)

            try:
                response = await self._client.get(url, headers=headers)
            except httpx.TransportError as e:
                self._breaker.record_error(host)
                if attempt == attempts:
                    raise RequestFailedError(url, str(e) or type(e).__name__) from e
                logger.debug("GET %s failed (attempt %d/%d): %s", url, attempt, attempts, e)
            else:
                if response.status_code < 500:
                    return response
                self._breaker.record_error(host)
                if attempt == attempts:
                    return response
                logger.debug(
                    "GET %s returned %d (attempt %d/%d)",
                    url,
                    response.status_code,
                    attempt,
                    attempts,
                )

            await self._sleep(delay)
            delay *= 2

        # Unreachable while max_attempts >= 1
        raise RequestFailedError(url, "no attempts made")

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "HTTPClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
