"""TMDB provider adapter.

TMDB identifiers are already integers and every capability has a native
endpoint, so each operation is a single retried request followed by
normalization.
"""

from collections.abc import Sequence

from moviestream.providers.base import MediaProviderAdapter
from moviestream.providers.retry import RetryableFetchClient
from moviestream.providers.tmdb.client import TMDBClient
from moviestream.providers.tmdb.normalizer import TMDBNormalizer
from moviestream.schemas import (
    CastMember,
    DiscoverOptions,
    MediaDetails,
    MediaItem,
    MediaType,
    PaginatedResponse,
    SearchResults,
    StreamingProvider,
    TimeWindow,
    TrendingItem,
    TrendingMediaType,
)
from moviestream.settings import TMDBSettings, settings
from moviestream.types.tmdb import TMDBPageData


class TMDBAdapter(MediaProviderAdapter):
    """Media provider backed by The Movie Database."""

    name = "tmdb"

    def __init__(
        self,
        fetcher: RetryableFetchClient | None = None,
        config: TMDBSettings | None = None,
    ) -> None:
        """Initialize TMDB adapter.

        Args:
            fetcher: Retrying HTTP client, created from settings when omitted.
            config: TMDB settings, defaults to global settings.
        """
        super().__init__()
        self._config = config or settings.tmdb
        self.client = TMDBClient(fetcher or RetryableFetchClient(), self._config)
        self.normalizer = TMDBNormalizer()

    async def aclose(self) -> None:
        await self.client.aclose()

    # -------------------------------------------------------------------------
    # Lists
    # -------------------------------------------------------------------------

    async def get_trending(
        self,
        media_type: TrendingMediaType = "all",
        time_window: TimeWindow = "week",
        page: int = 1,
    ) -> PaginatedResponse[TrendingItem]:
        data = await self.client.trending(media_type, time_window, page)
        default_type = None if media_type == "all" else media_type
        items = self.normalizer.normalize_ranked(data, page, default_type)
        return PaginatedResponse[TrendingItem](items=items, **self._counters(items, page, data))

    async def search_multi(self, query: str, page: int = 1) -> SearchResults:
        if not query.strip():
            return SearchResults(page=1)
        data = await self.client.search_multi(query, page)
        return self.normalizer.normalize_search(data)

    async def get_recommendations(
        self,
        media_type: MediaType,
        media_id: int,
        page: int = 1,
    ) -> PaginatedResponse[MediaItem]:
        data = await self.client.recommendations(media_type, media_id, page)
        items = self.normalizer.normalize_items(data.get("results", []), media_type)
        return PaginatedResponse[MediaItem](items=items, **self._counters(items, page, data))

    async def discover_by_country(
        self,
        media_type: MediaType,
        country: str,
        options: DiscoverOptions | None = None,
    ) -> PaginatedResponse[TrendingItem]:
        options = options or DiscoverOptions()
        data = await self.client.discover(
            media_type,
            page=options.page,
            country=country.upper(),
            genre_id=options.genre,
            year=options.year,
            sort_by=options.sort_by,
        )
        items = self.normalizer.normalize_ranked(data, options.page, media_type)
        return PaginatedResponse[TrendingItem](
            items=items, **self._counters(items, options.page, data)
        )

    @staticmethod
    def _counters(items: Sequence[MediaItem], page: int, data: TMDBPageData) -> dict[str, int]:
        """Pagination counters for a page of normalized items."""
        return {
            "page": page,
            "total_pages": data.get("total_pages", 0),
            "total_results": max(data.get("total_results", 0), len(items)),
        }

    # -------------------------------------------------------------------------
    # Single Title
    # -------------------------------------------------------------------------

    async def get_details(self, media_type: MediaType, media_id: int) -> MediaDetails:
        data = await self.client.details(media_type, media_id)
        return self.normalizer.normalize_details(data, media_type)

    async def get_credits(self, media_type: MediaType, media_id: int) -> list[CastMember]:
        data = await self.client.credits(media_type, media_id)
        return self.normalizer.normalize_credits(data)

    async def get_watch_providers(
        self,
        media_type: MediaType,
        media_id: int,
        region: str = "US",
    ) -> list[StreamingProvider]:
        data = await self.client.watch_providers(media_type, media_id)
        return self.normalizer.normalize_watch_providers(data, region)

    async def get_trailer_key(self, media_type: MediaType, media_id: int) -> str | None:
        data = await self.client.videos(media_type, media_id)
        return self.normalizer.select_trailer_key(data)

    def get_image_url(self, path: str | None, size: str = "w500") -> str | None:
        if not path:
            return None
        return f"{self._config.image_base_url}/{size}{path}"
