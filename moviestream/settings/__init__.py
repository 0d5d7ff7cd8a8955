"""Centralized configuration for MovieStream.

All configuration values are sourced from environment variables (.env file).
Provider API keys default to empty and are checked per provider by
``moviestream.settings.validation.validate_provider_config``.

Usage:
    from moviestream.settings import settings

    settings.tmdb.api_key
    settings.retry.max_attempts
"""

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from moviestream.settings.base import (
    HTTPSettings,
    LoggingSettings,
    ProviderSettings,
    RetrySettings,
)
from moviestream.settings.sources import OMDbSettings, TMDBSettings

__all__ = [
    # Main
    "Settings",
    "settings",
    # Base
    "LoggingSettings",
    "HTTPSettings",
    "RetrySettings",
    "ProviderSettings",
    # Sources
    "TMDBSettings",
    "OMDbSettings",
    # Utilities
    "get_masked_settings",
    "print_providers_status",
]


# =============================================================================
# GLOBAL SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Global application settings.

    Aggregates all configuration sections into a single object.
    Access via the singleton: `from moviestream.settings import settings`
    """

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    http: HTTPSettings = Field(default_factory=HTTPSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    provider: ProviderSettings = Field(default_factory=ProviderSettings)

    # Providers
    tmdb: TMDBSettings = Field(default_factory=TMDBSettings)
    omdb: OMDbSettings = Field(default_factory=OMDbSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

settings = Settings()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_masked_settings(source: Settings | None = None) -> dict[str, Any]:
    """Return settings dict with sensitive values masked.

    Args:
        source: Settings to dump, defaults to the singleton.

    Returns:
        Configuration dictionary safe for logging.
    """
    config = (source or settings).model_dump()
    mask = "***MASKED***"

    secrets = [
        ("tmdb", "api_key"),
        ("omdb", "api_key"),
    ]

    for section, key in secrets:
        if section in config and key in config[section] and config[section][key]:
            config[section][key] = mask

    return config


def print_providers_status(source: Settings | None = None) -> None:
    """Print configuration status for all media providers."""
    current = source or settings
    providers = [
        ("TMDB", current.tmdb.is_configured),
        ("OMDb", current.omdb.is_configured),
        ("Mock", True),
    ]

    print("\nMEDIA PROVIDERS STATUS:")
    print("-" * 40)
    for name, configured in providers:
        status = "✅" if configured else "❌"
        print(f"  {status} {name}")
    print(f"  Active: {current.provider.api_provider}")
    if current.provider.use_mock_data:
        print("  USE_MOCK_DATA is set: mock provider forced")
    print("-" * 40)
