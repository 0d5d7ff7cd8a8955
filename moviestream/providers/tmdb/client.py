"""TMDB API client.

Handles HTTP communication with The Movie Database API including
authentication and classified retries.
"""

import logging
from typing import Any, cast

from moviestream.errors import EntityNotFoundError, TerminalHTTPError
from moviestream.providers.retry import RetryableFetchClient
from moviestream.schemas import MediaType, RetryConfig
from moviestream.settings import TMDBSettings, settings
from moviestream.types.tmdb import (
    TMDBCreditsData,
    TMDBDetailsData,
    TMDBPageData,
    TMDBVideosData,
    TMDBWatchProvidersData,
)

logger = logging.getLogger(__name__)


class TMDBClient:
    """HTTP client for TMDB API v3.

    Every endpoint is one ``fetch_with_retry`` call. A 404 is reported as
    EntityNotFoundError, other failures propagate from the fetch client.
    """

    def __init__(
        self,
        fetcher: RetryableFetchClient,
        config: TMDBSettings | None = None,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """Initialize TMDB client.

        Args:
            fetcher: Shared retrying HTTP client.
            config: TMDB settings, defaults to global settings.
            retry_config: Retry policy override for every call.
        """
        cfg = config or settings.tmdb
        self._fetcher = fetcher
        self._base_url = cfg.base_url
        self._api_key = cfg.api_key
        self._language = cfg.language
        self._retry_config = retry_config

    async def aclose(self) -> None:
        """Close the underlying fetch client."""
        await self._fetcher.aclose()

    # -------------------------------------------------------------------------
    # HTTP Methods
    # -------------------------------------------------------------------------

    async def _get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute GET request with authentication.

        Args:
            endpoint: API endpoint path.
            params: Optional query parameters, None values dropped.

        Returns:
            JSON response as dictionary.

        Raises:
            EntityNotFoundError: When resource not found (404).
            FetchError: On other API or transport errors.
        """
        request_params: dict[str, Any] = {
            "api_key": self._api_key,
            "language": self._language,
        }
        if params:
            request_params.update({k: v for k, v in params.items() if v is not None})

        try:
            return await self._fetcher.fetch_with_retry(
                f"{self._base_url}{endpoint}",
                params=request_params,
                config=self._retry_config,
            )
        except TerminalHTTPError as e:
            if e.status_code == 404:
                raise EntityNotFoundError("tmdb", endpoint) from e
            raise

    # -------------------------------------------------------------------------
    # API Endpoints
    # -------------------------------------------------------------------------

    async def trending(self, media_type: str, time_window: str, page: int = 1) -> TMDBPageData:
        """Get trending titles."""
        data = await self._get(f"/trending/{media_type}/{time_window}", {"page": page})
        return cast(TMDBPageData, data)

    async def search_multi(self, query: str, page: int = 1) -> TMDBPageData:
        """Search movies, TV shows and people."""
        data = await self._get("/search/multi", {"query": query, "page": page})
        return cast(TMDBPageData, data)

    async def details(self, media_type: MediaType, media_id: int) -> TMDBDetailsData:
        """Get movie or TV details."""
        data = await self._get(f"/{media_type}/{media_id}")
        return cast(TMDBDetailsData, data)

    async def credits(self, media_type: MediaType, media_id: int) -> TMDBCreditsData:
        """Get cast credits."""
        data = await self._get(f"/{media_type}/{media_id}/credits")
        return cast(TMDBCreditsData, data)

    async def watch_providers(
        self, media_type: MediaType, media_id: int
    ) -> TMDBWatchProvidersData:
        """Get watch providers for all regions."""
        data = await self._get(f"/{media_type}/{media_id}/watch/providers")
        return cast(TMDBWatchProvidersData, data)

    async def videos(self, media_type: MediaType, media_id: int) -> TMDBVideosData:
        """Get trailers, teasers and clips."""
        data = await self._get(f"/{media_type}/{media_id}/videos")
        return cast(TMDBVideosData, data)

    async def recommendations(
        self, media_type: MediaType, media_id: int, page: int = 1
    ) -> TMDBPageData:
        """Get recommendations for a title."""
        data = await self._get(
            f"/{media_type}/{media_id}/recommendations", {"page": page}
        )
        return cast(TMDBPageData, data)

    async def discover(
        self,
        media_type: MediaType,
        page: int = 1,
        country: str | None = None,
        genre_id: int | None = None,
        year: int | None = None,
        sort_by: str = "popularity.desc",
    ) -> TMDBPageData:
        """Discover titles with filters.

        Args:
            media_type: movie or tv.
            page: Page number (1-500).
            country: Origin country (ISO 3166-1).
            genre_id: Genre ID filter.
            year: Release year (first air year for TV).
            sort_by: Sort order.

        Returns:
            Discover response with results.
        """
        params: dict[str, Any] = {
            "page": page,
            "sort_by": sort_by,
            "with_origin_country": country,
            "with_genres": genre_id,
        }
        if year:
            year_key = "primary_release_year" if media_type == "movie" else "first_air_date_year"
            params[year_key] = year

        data = await self._get(f"/discover/{media_type}", params)
        return cast(TMDBPageData, data)
