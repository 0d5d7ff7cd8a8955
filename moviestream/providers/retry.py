"""Retryable HTTP fetch client.

Performs one logical GET request with bounded exponential backoff and
classifies every failure into the typed taxonomy of ``moviestream.errors``:

- 2xx: body parsed and returned, no further attempts.
- 5xx and 429: retryable.
- any other non-2xx: terminal, raised after a single call.
- transport failures (DNS, timeout, connection reset): retryable.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
)
from tenacity.wait import wait_base

from moviestream.errors import (
    FetchError,
    ResponseFormatError,
    RetryableHTTPError,
    RetryExhaustedError,
    TerminalHTTPError,
    TransportError,
)
from moviestream.schemas import RetryConfig
from moviestream.settings import settings

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


def default_retry_config() -> RetryConfig:
    """Build the retry policy from settings."""
    return RetryConfig(
        max_attempts=settings.retry.max_attempts,
        base_delay_ms=settings.retry.base_delay_ms,
        max_delay_ms=settings.retry.max_delay_ms,
    )


def calculate_backoff_delay(attempt: int, config: RetryConfig) -> int:
    """Compute the wait before the attempt following ``attempt``.

    Args:
        attempt: 0-based index of the attempt that just failed.
        config: Retry policy.

    Returns:
        Delay in milliseconds: ``min(base * 2**attempt, max)``.

    Raises:
        ValueError: If attempt is negative.
    """
    if attempt < 0:
        raise ValueError(f"attempt must be >= 0, got {attempt}")
    return min(config.base_delay_ms * 2**attempt, config.max_delay_ms)


def is_retryable_error(exc: BaseException) -> bool:
    """Return True for fetch errors flagged as transient."""
    return isinstance(exc, FetchError) and exc.is_retryable


class wait_backoff(wait_base):
    """Tenacity wait strategy delegating to ``calculate_backoff_delay``."""

    def __init__(self, config: RetryConfig) -> None:
        self.config = config

    def __call__(self, retry_state: RetryCallState) -> float:
        attempt = retry_state.attempt_number - 1
        return calculate_backoff_delay(attempt, self.config) / 1000


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a retry wait before it happens."""
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0
    status = getattr(exc, "status_code", None)
    logger.warning(
        f"Attempt {retry_state.attempt_number} failed "
        f"(status={status}): {exc}. Retrying in {delay:.2f}s"
    )


class RetryableFetchClient:
    """Async HTTP client with classified retries.

    The sleep used between attempts is injectable so backoff can be
    observed without waiting on the wall clock.

    Attributes:
        default_config: Retry policy used when a call passes none.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        sleep: SleepFunc = asyncio.sleep,
        default_config: RetryConfig | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the fetch client.

        Args:
            client: HTTP client to use. Created lazily when omitted and
                then owned (closed) by this instance.
            sleep: Awaitable sleep taking seconds.
            default_config: Retry policy, defaults to settings.
            timeout: Per-request timeout in seconds, defaults to settings.
        """
        self._client = client
        self._owns_client = client is None
        self._sleep = sleep
        self._timeout = timeout if timeout is not None else settings.http.timeout_seconds
        self.default_config = default_config or default_retry_config()

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "RetryableFetchClient":
        """Enter context."""
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit context and close the owned HTTP client."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Return the HTTP client, creating it on first use."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": settings.http.user_agent},
            )
        return self._client

    # -------------------------------------------------------------------------
    # HTTP Methods
    # -------------------------------------------------------------------------

    async def fetch_with_retry(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        config: RetryConfig | None = None,
    ) -> Any:
        """GET a JSON resource with bounded exponential backoff.

        Args:
            url: Absolute URL.
            params: Query parameters.
            headers: Extra request headers.
            config: Retry policy, defaults to ``default_config``.

        Returns:
            Parsed JSON body of the first 2xx response.

        Raises:
            TerminalHTTPError: On a non-retryable status (one call made).
            ResponseFormatError: When a 2xx body is not valid JSON.
            RetryExhaustedError: When every attempt failed transiently.
        """
        policy = config or self.default_config
        retrying = AsyncRetrying(
            stop=stop_after_attempt(policy.max_attempts),
            wait=wait_backoff(policy),
            retry=retry_if_exception(is_retryable_error),
            sleep=self._sleep,
            before_sleep=_log_retry,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    return await self._request(url, params, headers)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            status = getattr(last_error, "status_code", None)
            logger.error(
                f"Giving up on {url} after {policy.max_attempts} attempts "
                f"(last status={status})"
            )
            raise RetryExhaustedError(
                f"Request failed after {policy.max_attempts} attempts: {url}",
                attempts=policy.max_attempts,
                status_code=status,
                url=url,
            ) from last_error

    async def _request(
        self,
        url: str,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
    ) -> Any:
        """Execute a single GET and classify the outcome.

        Args:
            url: Absolute URL.
            params: Query parameters.
            headers: Extra request headers.

        Returns:
            Parsed JSON body.

        Raises:
            TransportError: On network-level failure.
            RetryableHTTPError: On 5xx and 429.
            TerminalHTTPError: On other non-2xx statuses.
            ResponseFormatError: On an unparseable 2xx body.
        """
        try:
            response = await self._get_client().get(url, params=params, headers=headers)
        except httpx.TransportError as e:
            logger.warning(f"Transport failure: {url}: {e!r}")
            raise TransportError(f"Transport failure: {url}", url=url) from e

        return self._handle_response(response, url)

    @staticmethod
    def _handle_response(response: httpx.Response, url: str) -> Any:
        """Handle HTTP response and extract JSON.

        Args:
            response: HTTP response object.
            url: Requested URL without query string (for errors).

        Returns:
            Parsed JSON body.
        """
        status = response.status_code

        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                raise ResponseFormatError(
                    f"Invalid JSON body: {url}", status_code=status, url=url
                ) from e

        if status >= 500 or status == 429:
            raise RetryableHTTPError(
                f"HTTP {status}: {url}", status_code=status, url=url
            )

        raise TerminalHTTPError(f"HTTP {status}: {url}", status_code=status, url=url)
