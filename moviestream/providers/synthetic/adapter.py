"""Synthetic provider adapter.

Serves the fixed in-memory catalog with no network access, so the app
runs without any live provider and adapter parity can be checked
offline.
"""

from moviestream.errors import EntityNotFoundError
from moviestream.providers.base import MediaProviderAdapter
from moviestream.providers.synthetic.data import (
    MOCK_CAST,
    MOCK_DETAILS,
    MOCK_MOVIES,
    MOCK_PROVIDERS,
    MOCK_TRAILER_KEY,
    MOCK_TRENDING_ALL,
    MOCK_TV_SHOWS,
    PLACEHOLDER_IMAGE_URL,
    generic_details,
)
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

PAGE_SIZE = 20
RECOMMENDATION_COUNT = 5


def _catalog(media_type: TrendingMediaType) -> list[MediaItem]:
    if media_type == "movie":
        return MOCK_MOVIES
    if media_type == "tv":
        return MOCK_TV_SHOWS
    return MOCK_TRENDING_ALL


def _ranked_page(items: list[MediaItem], page: int) -> PaginatedResponse[TrendingItem]:
    offset = (page - 1) * PAGE_SIZE
    return PaginatedResponse[TrendingItem](
        items=[
            TrendingItem(**item.model_dump(), rank=offset + index + 1)
            for index, item in enumerate(items)
        ],
        page=page,
        total_pages=1,
        total_results=len(items),
    )


class SyntheticAdapter(MediaProviderAdapter):
    """Offline provider serving a fixed catalog."""

    name = "mock"

    async def get_trending(
        self,
        media_type: TrendingMediaType = "all",
        time_window: TimeWindow = "week",
        page: int = 1,
    ) -> PaginatedResponse[TrendingItem]:
        return _ranked_page(_catalog(media_type), page)

    async def search_multi(self, query: str, page: int = 1) -> SearchResults:
        if not query.strip():
            return SearchResults(page=1)

        needle = query.lower()

        def matches(item: MediaItem) -> bool:
            return needle in item.title.lower() or needle in item.overview.lower()

        movies = [item for item in MOCK_MOVIES if matches(item)]
        tv_shows = [item for item in MOCK_TV_SHOWS if matches(item)]
        return SearchResults(
            movies=movies,
            tv_shows=tv_shows,
            page=page,
            total_pages=1,
            total_results=len(movies) + len(tv_shows),
        )

    async def get_details(self, media_type: MediaType, media_id: int) -> MediaDetails:
        details = MOCK_DETAILS.get((media_type, media_id))
        if details is not None:
            return details

        for item in _catalog(media_type):
            if item.id == media_id:
                return generic_details(item)

        raise EntityNotFoundError(self.name, media_id)

    async def get_credits(self, media_type: MediaType, media_id: int) -> list[CastMember]:
        return list(MOCK_CAST)

    async def get_watch_providers(
        self,
        media_type: MediaType,
        media_id: int,
        region: str = "US",
    ) -> list[StreamingProvider]:
        return list(MOCK_PROVIDERS)

    async def get_trailer_key(self, media_type: MediaType, media_id: int) -> str | None:
        return MOCK_TRAILER_KEY

    async def get_recommendations(
        self,
        media_type: MediaType,
        media_id: int,
        page: int = 1,
    ) -> PaginatedResponse[MediaItem]:
        items = _catalog(media_type)[:RECOMMENDATION_COUNT]
        return PaginatedResponse[MediaItem](
            items=items, page=page, total_pages=1, total_results=len(items)
        )

    async def discover_by_country(
        self,
        media_type: MediaType,
        country: str,
        options: DiscoverOptions | None = None,
    ) -> PaginatedResponse[TrendingItem]:
        options = options or DiscoverOptions()
        return _ranked_page(_catalog(media_type), options.page)

    def get_image_url(self, path: str | None, size: str = "w500") -> str | None:
        if not path:
            return None
        return PLACEHOLDER_IMAGE_URL
