"""OMDb provider adapter.

OMDb natively supports search and lookup by IMDb id only. Numeric ids
handed out to callers come from the identifier bridge; lookups resolve
them back and degrade to an empty result when the id was never seen.
Trending, discover, watch providers, trailers and recommendations are
synthesized by the fallback engine.
"""

from moviestream.providers.base import MediaProviderAdapter
from moviestream.providers.fallback import DiagnosticSink, FallbackPolicyEngine
from moviestream.providers.identifiers import IdentifierBridge
from moviestream.providers.omdb.client import OMDbClient
from moviestream.providers.omdb.normalizer import (
    OMDbNormalizer,
    split_names,
    validate_poster_url,
)
from moviestream.providers.retry import RetryableFetchClient
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
from moviestream.settings import OMDbSettings

OMDB_SEARCH_TYPES: dict[str, str] = {"movie": "movie", "tv": "series"}


class OMDbAdapter(MediaProviderAdapter):
    """Media provider backed by the Open Movie Database."""

    name = "omdb"
    display_name = "OMDb Adapter"

    def __init__(
        self,
        bridge: IdentifierBridge,
        fetcher: RetryableFetchClient | None = None,
        config: OMDbSettings | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        """Initialize OMDb adapter.

        Args:
            bridge: Shared identifier bridge.
            fetcher: Retrying HTTP client, created from settings when omitted.
            config: OMDb settings, defaults to global settings.
            sink: Receives fallback diagnostics.
        """
        super().__init__()
        self.bridge = bridge
        self.client = OMDbClient(fetcher or RetryableFetchClient(), config)
        self.normalizer = OMDbNormalizer(bridge)
        self.fallback = FallbackPolicyEngine(self.display_name, self._search, sink)

    async def aclose(self) -> None:
        await self.client.aclose()

    # -------------------------------------------------------------------------
    # Native Capabilities
    # -------------------------------------------------------------------------

    async def _search(
        self,
        query: str,
        page: int,
        media_type: MediaType | None,
        year: int | None = None,
    ) -> PaginatedResponse[MediaItem]:
        """Search one OMDb page, typed to movie or series when given."""
        search_type = OMDB_SEARCH_TYPES[media_type] if media_type else None
        results = await self.client.search(query, page, search_type, year)
        items = self.normalizer.normalize_items(results.items)
        return PaginatedResponse[MediaItem](
            items=items,
            page=page,
            total_pages=results.total_pages,
            total_results=max(results.total_results, len(items)),
        )

    async def search_multi(self, query: str, page: int = 1) -> SearchResults:
        if not query.strip():
            return SearchResults(page=page)
        results = await self.client.search(query, page)
        return self.normalizer.normalize_search(
            results.items, page, results.total_results, results.total_pages
        )

    def _resolve(self, media_id: int, operation: str) -> str | None:
        """Map a numeric id back to its IMDb id, logging misses."""
        imdb_id = self.bridge.get_native_id(media_id)
        if imdb_id is None:
            self.logger.warning(
                f"[{self.display_name}] Cannot {operation} for {media_id}: IMDb ID not found"
            )
        return imdb_id

    async def get_details(self, media_type: MediaType, media_id: int) -> MediaDetails | None:
        imdb_id = self._resolve(media_id, "get details")
        if imdb_id is None:
            return None
        data = await self.client.details(imdb_id, plot="full")
        return self.normalizer.normalize_details(data)

    async def get_credits(self, media_type: MediaType, media_id: int) -> list[CastMember]:
        imdb_id = self._resolve(media_id, "get credits")
        if imdb_id is None:
            return []
        data = await self.client.details(imdb_id, plot="short")
        return self.normalizer.normalize_cast(data)

    def get_image_url(self, path: str | None, size: str = "w500") -> str | None:
        # OMDb posters are absolute URLs with a fixed size
        return validate_poster_url(path)

    # -------------------------------------------------------------------------
    # Fallback Capabilities
    # -------------------------------------------------------------------------

    async def get_trending(
        self,
        media_type: TrendingMediaType = "all",
        time_window: TimeWindow = "week",
        page: int = 1,
    ) -> PaginatedResponse[TrendingItem]:
        return await self.fallback.trending(media_type, page)

    async def discover_by_country(
        self,
        media_type: MediaType,
        country: str,
        options: DiscoverOptions | None = None,
    ) -> PaginatedResponse[TrendingItem]:
        return await self.fallback.discover_by_country(media_type, country, options)

    async def get_watch_providers(
        self,
        media_type: MediaType,
        media_id: int,
        region: str = "US",
    ) -> list[StreamingProvider]:
        return self.fallback.watch_providers()

    async def get_trailer_key(self, media_type: MediaType, media_id: int) -> str | None:
        return self.fallback.trailer_key()

    async def get_recommendations(
        self,
        media_type: MediaType,
        media_id: int,
        page: int = 1,
    ) -> PaginatedResponse[MediaItem]:
        return await self.fallback.recommendations(
            media_type, media_id, page, resolve_seed=self._genre_seed
        )

    async def _genre_seed(self, media_type: MediaType, media_id: int) -> str | None:
        """First genre of a title, used to seed recommendations."""
        imdb_id = self._resolve(media_id, "seed recommendations")
        if imdb_id is None:
            return None
        data = await self.client.details(imdb_id, plot="short")
        genres = split_names(data.get("Genre"))
        return genres[0] if genres else None
