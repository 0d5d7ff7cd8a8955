"""Capability fallbacks for partially-capable providers.

When a provider has no native endpoint for a capability, the engine
synthesizes a contract-shaped substitute from the provider's search and
reports that it did so through a diagnostic sink. Every policy emits
exactly one diagnostic, before returning, and never raises.
"""

import logging
import math
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import structlog

from moviestream.errors import MediaProviderError
from moviestream.schemas import (
    DiscoverOptions,
    MediaItem,
    MediaType,
    PaginatedResponse,
    StreamingProvider,
    TrendingItem,
    TrendingMediaType,
)

logger = logging.getLogger(__name__)

DiagnosticSink = Callable[[str], None]
SearchFunc = Callable[
    [str, int, MediaType | None, int | None],
    Awaitable[PaginatedResponse[MediaItem]],
]
SeedResolver = Callable[[MediaType, int], Awaitable[str | None]]

MAX_FALLBACK_PAGES = 10
SEARCH_PAGE_SIZE = 10

# =============================================================================
# SEED TERMS
# =============================================================================

POPULAR_SEARCH_TERMS: dict[str, tuple[str, ...]] = {
    "movie": ("action", "comedy", "drama", "thriller", "adventure"),
    "tv": ("series", "show", "drama", "comedy", "crime"),
    "all": ("movie", "series", "action", "drama", "comedy"),
}

COUNTRY_SEARCH_TERMS: dict[str, tuple[str, ...]] = {
    "US": ("hollywood", "american"),
    "IN": ("bollywood", "indian"),
    "JP": ("anime", "japanese"),
    "CN": ("chinese", "china"),
    "RU": ("russian", "russia"),
    "ES": ("spanish", "spain"),
    "DE": ("german", "germany"),
    "FR": ("french", "france"),
    "KR": ("korean", "korea"),
    "GB": ("british", "uk"),
}


# =============================================================================
# CAPABILITY FALLBACKS
# =============================================================================


@dataclass(frozen=True)
class CapabilityFallback:
    """Named substitute for a missing capability.

    Attributes:
        capability: Contract operation name.
        strategy: Human-readable description of the substitute.
    """

    capability: str
    strategy: str

    MESSAGE_TEMPLATE = "[{adapter}] Fallback: {capability} - using {strategy}"

    def message(self, adapter: str) -> str:
        """Render the diagnostic message for an adapter."""
        return self.MESSAGE_TEMPLATE.format(
            adapter=adapter, capability=self.capability, strategy=self.strategy
        )


TRENDING_FALLBACK = CapabilityFallback("get_trending", "popular search terms")
DISCOVER_FALLBACK = CapabilityFallback(
    "discover_by_country", "country-specific search terms"
)
WATCH_PROVIDERS_FALLBACK = CapabilityFallback(
    "get_watch_providers", "empty list (not supported by OMDb)"
)
TRAILER_FALLBACK = CapabilityFallback(
    "get_trailer_key", "null (not supported by OMDb)"
)
RECOMMENDATIONS_FALLBACK = CapabilityFallback(
    "get_recommendations", "genre-based search"
)


def structlog_sink(message: str) -> None:
    """Default diagnostic sink: structured warning event."""
    structlog.get_logger("moviestream.fallback").warning(
        "capability_fallback", message=message
    )


def seed_term(terms: tuple[str, ...], page: int) -> tuple[str, int]:
    """Pick the search term and search page for a fallback page.

    Pages rotate through ``terms`` first, then advance the search page.

    Args:
        terms: Seed terms, non-empty.
        page: Requested 1-based page.

    Returns:
        Tuple of (term, search_page).
    """
    term = terms[(page - 1) % len(terms)]
    search_page = max(math.ceil(page / len(terms)), 1)
    return term, search_page


def _ranked(
    items: list[MediaItem],
    page: int,
) -> list[TrendingItem]:
    """Attach sequential ranks continuing from previous pages."""
    offset = (page - 1) * SEARCH_PAGE_SIZE
    return [
        TrendingItem(**item.model_dump(), rank=offset + index + 1)
        for index, item in enumerate(items)
    ]


class FallbackPolicyEngine:
    """Synthesizes results for capabilities a provider lacks.

    Attributes:
        adapter_name: Display name used in diagnostics (e.g. ``OMDb Adapter``).
        max_pages: Cap applied to ``total_pages`` of synthesized results.
    """

    def __init__(
        self,
        adapter_name: str,
        search: SearchFunc,
        sink: DiagnosticSink | None = None,
        max_pages: int = MAX_FALLBACK_PAGES,
    ) -> None:
        """Initialize the engine.

        Args:
            adapter_name: Display name used in diagnostics.
            search: Provider search used to derive substitutes.
            sink: Receives one message per fallback, defaults to structlog.
            max_pages: Cap on ``total_pages``.
        """
        self.adapter_name = adapter_name
        self.max_pages = max_pages
        self._search = search
        self._sink = sink or structlog_sink

    def _emit(self, fallback: CapabilityFallback) -> None:
        self._sink(fallback.message(self.adapter_name))

    async def _safe_search(
        self,
        capability: str,
        query: str,
        page: int,
        media_type: MediaType | None,
        year: int | None = None,
    ) -> PaginatedResponse[MediaItem] | None:
        """Run the provider search, absorbing provider errors.

        Returns:
            Search page, or None when the search failed.
        """
        try:
            return await self._search(query, page, media_type, year)
        except MediaProviderError as e:
            logger.warning(
                f"[{self.adapter_name}] {capability} search for '{query}' failed: {e}"
            )
            return None

    # -------------------------------------------------------------------------
    # Search-derived Policies
    # -------------------------------------------------------------------------

    async def trending(
        self,
        media_type: TrendingMediaType,
        page: int = 1,
    ) -> PaginatedResponse[TrendingItem]:
        """Derive a trending page from popularity seed terms.

        Args:
            media_type: all, movie or tv.
            page: Requested 1-based page.

        Returns:
            Ranked page with ``total_pages`` capped.
        """
        self._emit(TRENDING_FALLBACK)
        term, search_page = seed_term(POPULAR_SEARCH_TERMS[media_type], page)
        search_type: MediaType | None = None if media_type == "all" else media_type
        return await self._ranked_search(
            TRENDING_FALLBACK.capability, term, page, search_page, search_type
        )

    async def discover_by_country(
        self,
        media_type: MediaType,
        country: str,
        options: DiscoverOptions | None = None,
    ) -> PaginatedResponse[TrendingItem]:
        """Derive a discover page from country seed terms.

        Unknown countries are searched by their lowercased code.
        """
        self._emit(DISCOVER_FALLBACK)
        options = options or DiscoverOptions()
        terms = COUNTRY_SEARCH_TERMS.get(country.upper(), (country.lower(),))
        term, search_page = seed_term(terms, options.page)
        return await self._ranked_search(
            DISCOVER_FALLBACK.capability,
            term,
            options.page,
            search_page,
            media_type,
            options.year,
        )

    async def _ranked_search(
        self,
        capability: str,
        term: str,
        page: int,
        search_page: int,
        media_type: MediaType | None,
        year: int | None = None,
    ) -> PaginatedResponse[TrendingItem]:
        results = await self._safe_search(capability, term, search_page, media_type, year)
        if results is None:
            return PaginatedResponse[TrendingItem].empty(page)

        return PaginatedResponse[TrendingItem](
            items=_ranked(results.items, page),
            page=page,
            total_pages=min(results.total_pages, self.max_pages),
            total_results=results.total_results,
        )

    async def recommendations(
        self,
        media_type: MediaType,
        media_id: int,
        page: int = 1,
        resolve_seed: SeedResolver | None = None,
    ) -> PaginatedResponse[MediaItem]:
        """Best-effort recommendations from a genre search.

        Args:
            media_type: movie or tv.
            media_id: Source title, excluded from the results.
            page: Requested 1-based page.
            resolve_seed: Returns a genre to search for the source title.

        Returns:
            Search-derived page, empty when the search failed.
        """
        self._emit(RECOMMENDATIONS_FALLBACK)

        term: str | None = None
        if resolve_seed is not None:
            try:
                term = await resolve_seed(media_type, media_id)
            except MediaProviderError as e:
                logger.warning(
                    f"[{self.adapter_name}] Could not resolve recommendation "
                    f"seed for {media_id}: {e}"
                )
        if not term:
            term = "series" if media_type == "tv" else "movie"

        results = await self._safe_search(
            RECOMMENDATIONS_FALLBACK.capability, term, page, media_type
        )
        if results is None:
            return PaginatedResponse[MediaItem].empty(page)

        return PaginatedResponse[MediaItem](
            items=[item for item in results.items if item.id != media_id],
            page=page,
            total_pages=min(results.total_pages, self.max_pages),
            total_results=results.total_results,
        )

    # -------------------------------------------------------------------------
    # Constant Policies
    # -------------------------------------------------------------------------

    def watch_providers(self) -> list[StreamingProvider]:
        """No streaming data is available: always empty."""
        self._emit(WATCH_PROVIDERS_FALLBACK)
        return []

    def trailer_key(self) -> str | None:
        """No trailer data is available: always None."""
        self._emit(TRAILER_FALLBACK)
        return None
