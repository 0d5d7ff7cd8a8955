"""OMDb API configuration settings.

String-ID provider keyed by IMDb identifiers.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

OMDB_MIN_KEY_LENGTH = 8


class OMDbSettings(BaseSettings):
    """OMDb API configuration.

    Attributes:
        api_key: OMDb API key (required when OMDb is the active provider).
        base_url: OMDb API base URL.
    """

    api_key: str = Field(default="", alias="OMDB_API_KEY")
    base_url: str = Field(
        default="https://www.omdbapi.com",
        alias="OMDB_BASE_URL",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if OMDb API key looks usable."""
        return len(self.api_key.strip()) >= OMDB_MIN_KEY_LENGTH

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Remove trailing slash so query strings can be appended."""
        return v.rstrip("/")
