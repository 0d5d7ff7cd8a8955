"""Base configuration settings.

Contains foundational settings for logging, HTTP, retries and
provider selection.
"""

from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# PROJECT ROOT DETECTION
# =============================================================================

_PROJECT_ROOT = Path(__file__).parent.parent.parent


def get_project_root() -> Path:
    """Get project root directory."""
    return _PROJECT_ROOT


# =============================================================================
# LOGGING SETTINGS
# =============================================================================


class LoggingSettings(BaseSettings):
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Log files directory, empty to disable file logging.
        format: Log format (json or text).
    """

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="", alias="LOG_DIR")
    format: str = Field(default="json", alias="LOG_FORMAT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid LOG_LEVEL. Valid: {valid_levels}")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format is json or text."""
        v_lower = v.lower()
        if v_lower not in {"json", "text"}:
            raise ValueError("LOG_FORMAT must be 'json' or 'text'")
        return v_lower

    @property
    def log_path(self) -> Path | None:
        """Resolved log directory, None when file logging is disabled."""
        if not self.log_dir:
            return None
        path = Path(self.log_dir)
        return path if path.is_absolute() else _PROJECT_ROOT / path


# =============================================================================
# HTTP SETTINGS
# =============================================================================


class HTTPSettings(BaseSettings):
    """Outbound HTTP configuration.

    Attributes:
        timeout_seconds: Per-request timeout. A timeout counts as a
            transport failure and is retried.
        user_agent: HTTP User-Agent header.
    """

    timeout_seconds: float = Field(default=10.0, gt=0, alias="HTTP_TIMEOUT_SECONDS")
    user_agent: str = Field(
        default="MovieStream/1.0",
        alias="USER_AGENT",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# =============================================================================
# RETRY SETTINGS
# =============================================================================


class RetrySettings(BaseSettings):
    """Default retry policy for provider requests.

    Attributes:
        max_attempts: Total attempts per request, first one included.
        base_delay_ms: Backoff delay before the first retry.
        max_delay_ms: Backoff ceiling.
    """

    max_attempts: int = Field(default=3, ge=1, alias="RETRY_MAX_ATTEMPTS")
    base_delay_ms: int = Field(default=1000, gt=0, alias="RETRY_BASE_DELAY_MS")
    max_delay_ms: int = Field(default=10000, gt=0, alias="RETRY_MAX_DELAY_MS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_delay_bounds(self) -> "RetrySettings":
        """Ensure the ceiling is not below the base delay."""
        if self.max_delay_ms < self.base_delay_ms:
            raise ValueError("RETRY_MAX_DELAY_MS must be >= RETRY_BASE_DELAY_MS")
        return self


# =============================================================================
# PROVIDER SELECTION
# =============================================================================


class ProviderSettings(BaseSettings):
    """Active provider selection.

    Attributes:
        api_provider: Requested provider name (tmdb, omdb, mock).
        use_mock_data: Forces the synthetic provider when true.
    """

    api_provider: str = Field(default="tmdb", alias="API_PROVIDER")
    use_mock_data: bool = Field(default=False, alias="USE_MOCK_DATA")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("api_provider")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        """Lowercase and strip the provider name."""
        return v.strip().lower()
