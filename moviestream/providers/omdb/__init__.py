"""OMDb provider: client, normalizer and adapter."""

from moviestream.providers.omdb.adapter import OMDbAdapter
from moviestream.providers.omdb.client import OMDbClient, OMDbSearchPage, parse_error_code
from moviestream.providers.omdb.normalizer import OMDbNormalizer

__all__ = [
    "OMDbAdapter",
    "OMDbClient",
    "OMDbNormalizer",
    "OMDbSearchPage",
    "parse_error_code",
]
