"""Provider-scoped configuration validation.

Settings are rebuilt from the environment on every call so that a
misconfigured key for one provider never leaks into another provider's
validation.
"""

import logging

from moviestream.errors import ConfigurationError
from moviestream.settings.sources.omdb import OMDB_MIN_KEY_LENGTH, OMDbSettings
from moviestream.settings.sources.tmdb import TMDBSettings

logger = logging.getLogger(__name__)

OMDB_KEY_ENV = "OMDB_API_KEY"
OMDB_KEY_URL = "https://www.omdbapi.com/apikey.aspx"


def validate_provider_config(provider_name: str) -> None:
    """Validate configuration required by a provider.

    Args:
        provider_name: Provider identifier (tmdb, omdb, mock).

    Raises:
        ConfigurationError: If the OMDb key is missing or malformed while
            OMDb is the requested provider.
    """
    name = str(provider_name).strip().lower()

    if name == "omdb":
        _validate_omdb(OMDbSettings())
    elif name == "tmdb":
        if not TMDBSettings().is_configured:
            logger.warning("TMDB_API_KEY is not set: TMDB requests will be rejected")


def _validate_omdb(omdb: OMDbSettings) -> None:
    """Check presence and minimum length of the OMDb key.

    Args:
        omdb: Freshly loaded OMDb settings.

    Raises:
        ConfigurationError: On a missing or too-short key.
    """
    api_key = omdb.api_key.strip()

    if not api_key:
        raise ConfigurationError(
            f"OMDb API configuration error: {OMDB_KEY_ENV} is required "
            "when using OMDb provider. "
            "Please set it in your environment variables."
        )

    if len(api_key) < OMDB_MIN_KEY_LENGTH:
        raise ConfigurationError(
            f"OMDb API configuration error: {OMDB_KEY_ENV} appears to be invalid. "
            f"Please check your API key at {OMDB_KEY_URL}"
        )
