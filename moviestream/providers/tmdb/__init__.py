"""TMDB provider: client, normalizer and adapter."""

from moviestream.providers.tmdb.adapter import TMDBAdapter
from moviestream.providers.tmdb.client import TMDBClient
from moviestream.providers.tmdb.normalizer import TMDBNormalizer

__all__ = [
    "TMDBAdapter",
    "TMDBClient",
    "TMDBNormalizer",
]
