"""Exception hierarchy for the media provider layer.

Every error raised by a provider adapter derives from MediaProviderError
and carries an ``is_retryable`` flag so callers can decide whether a
later attempt is worthwhile.
"""


class MediaProviderError(Exception):
    """Base exception for media provider errors."""

    is_retryable: bool = False


class ConfigurationError(MediaProviderError):
    """Raised when a provider is missing or has invalid configuration."""

    pass


# =============================================================================
# FETCH ERRORS
# =============================================================================


class FetchError(MediaProviderError):
    """Base exception for HTTP fetch failures.

    Attributes:
        status_code: HTTP status of the failed response, None for
            transport failures.
        url: Requested URL.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str | None = None,
        is_retryable: bool | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url
        if is_retryable is not None:
            self.is_retryable = is_retryable


class TransportError(FetchError):
    """Raised on timeouts, DNS failures and connection resets."""

    is_retryable = True


class RetryableHTTPError(FetchError):
    """Raised on 5xx and 429 responses."""

    is_retryable = True


class TerminalHTTPError(FetchError):
    """Raised on non-2xx responses that a retry would not fix."""

    is_retryable = False


class ResponseFormatError(FetchError):
    """Raised when a 2xx response body is not valid JSON."""

    is_retryable = False


class RetryExhaustedError(FetchError):
    """Raised when every attempt failed with a retryable error.

    Attributes:
        attempts: Number of attempts made.
    """

    is_retryable = True

    def __init__(
        self,
        message: str,
        *,
        attempts: int,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, url=url)
        self.attempts = attempts


# =============================================================================
# PROVIDER ERRORS
# =============================================================================


class EntityNotFoundError(MediaProviderError):
    """Raised when a provider reports the requested title does not exist."""

    is_retryable = False

    def __init__(self, provider: str, entity_id: int | str) -> None:
        super().__init__(f"{provider}: entity not found: {entity_id}")
        self.provider = provider
        self.entity_id = entity_id


class ProviderResponseError(MediaProviderError):
    """Raised when a provider answers 2xx with an error payload.

    Attributes:
        code: Classified error code (e.g. ``INVALID_API_KEY``).
    """

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.code = code
        self.is_retryable = code == "REQUEST_LIMIT"
