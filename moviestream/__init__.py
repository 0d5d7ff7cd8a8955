"""MovieStream media provider adapter layer.

Unifies TMDB, OMDb and an offline synthetic catalog behind a single
async capability contract.

Usage:
    from moviestream.providers import create_media_api

    async with create_media_api() as api:
        page = await api.get_trending("movie", "week")
"""

__version__ = "1.0.0"
