"""Abstract base class for media provider adapters.

Every provider exposes the same async capability contract so callers
never branch on which provider is active.
"""

import logging
from abc import ABC, abstractmethod
from types import TracebackType

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


class MediaProviderAdapter(ABC):
    """Base class for all media providers.

    Attributes:
        name: Provider identifier (tmdb, omdb, mock).
        logger: Logger instance for this provider.
    """

    name: str = "base"

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"moviestream.providers.{self.name}")

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "MediaProviderAdapter":
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release network resources. No-op for offline providers."""
        return None

    # -------------------------------------------------------------------------
    # Capability Contract
    # -------------------------------------------------------------------------

    @abstractmethod
    async def get_trending(
        self,
        media_type: TrendingMediaType = "all",
        time_window: TimeWindow = "week",
        page: int = 1,
    ) -> PaginatedResponse[TrendingItem]:
        """Get trending titles, ranked from 1 within the page sequence."""

    @abstractmethod
    async def search_multi(self, query: str, page: int = 1) -> SearchResults:
        """Search movies and TV shows. A blank query returns no results."""

    @abstractmethod
    async def get_details(
        self,
        media_type: MediaType,
        media_id: int,
    ) -> MediaDetails | None:
        """Get full details for a title.

        Returns:
            Details, or None when the id cannot be resolved locally.

        Raises:
            EntityNotFoundError: When the provider reports no such title.
        """

    @abstractmethod
    async def get_credits(
        self,
        media_type: MediaType,
        media_id: int,
    ) -> list[CastMember]:
        """Get cast members ordered by billing."""

    @abstractmethod
    async def get_watch_providers(
        self,
        media_type: MediaType,
        media_id: int,
        region: str = "US",
    ) -> list[StreamingProvider]:
        """Get streaming availability in a region."""

    @abstractmethod
    async def get_trailer_key(
        self,
        media_type: MediaType,
        media_id: int,
    ) -> str | None:
        """Get a YouTube trailer key, None when unavailable."""

    @abstractmethod
    async def get_recommendations(
        self,
        media_type: MediaType,
        media_id: int,
        page: int = 1,
    ) -> PaginatedResponse[MediaItem]:
        """Get titles related to a title."""

    @abstractmethod
    async def discover_by_country(
        self,
        media_type: MediaType,
        country: str,
        options: DiscoverOptions | None = None,
    ) -> PaginatedResponse[TrendingItem]:
        """Discover titles originating from a country (ISO 3166-1 code)."""

    @abstractmethod
    def get_image_url(self, path: str | None, size: str = "w500") -> str | None:
        """Build an absolute image URL, None when no image exists."""

    def __repr__(self) -> str:
        """String representation."""
        return f"<{self.__class__.__name__}(name='{self.name}')>"
