"""Provider source settings."""

from moviestream.settings.sources.omdb import OMDbSettings
from moviestream.settings.sources.tmdb import TMDBSettings

__all__ = [
    "OMDbSettings",
    "TMDBSettings",
]
