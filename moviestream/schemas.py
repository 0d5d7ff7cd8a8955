"""Pydantic schemas shared by every media provider.

Defines the immutable DTOs returned by provider adapters and the
retry policy model consumed by the fetch client.
"""

from typing import Generic, Literal, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

MediaType = Literal["movie", "tv"]
TrendingMediaType = Literal["all", "movie", "tv"]
TimeWindow = Literal["day", "week"]
ProviderType = Literal["flatrate", "rent", "buy"]

T = TypeVar("T")


# =============================================================================
# MEDIA SCHEMAS
# =============================================================================


class MediaItem(BaseModel):
    """Movie or TV show summary.

    Attributes:
        id: App-wide numeric identifier.
        title: Display title.
        original_title: Title in original language.
        poster_path: Poster path or absolute URL.
        backdrop_path: Backdrop path or absolute URL.
        overview: Plot synopsis.
        release_date: ISO date (YYYY-MM-DD), empty when unknown.
        vote_average: Average rating (0-10), None when unrated.
        vote_count: Number of votes.
        media_type: movie or tv.
        genre_ids: Ordered genre identifiers.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Zero is accepted: a bridged id is a string hash, and a hash of 0 is valid
    id: int = Field(ge=0)
    title: str
    original_title: str = ""
    poster_path: str | None = None
    backdrop_path: str | None = None
    overview: str = ""
    release_date: str = ""
    vote_average: float | None = Field(default=None, ge=0, le=10)
    vote_count: int = Field(default=0, ge=0)
    media_type: MediaType
    genre_ids: list[int] = Field(default_factory=list)


class TrendingItem(MediaItem):
    """Media item with a 1-based position in a ranked list."""

    rank: int = Field(gt=0)


class Genre(BaseModel):
    """Genre id and name pair."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class ProductionCountry(BaseModel):
    """Production country (ISO 3166-1 code + name)."""

    model_config = ConfigDict(frozen=True)

    iso_3166_1: str
    name: str


class SpokenLanguage(BaseModel):
    """Spoken language (ISO 639-1 code + names)."""

    model_config = ConfigDict(frozen=True)

    iso_639_1: str
    name: str
    english_name: str = ""


class MediaDetails(MediaItem):
    """Full details for a single title.

    Attributes:
        runtime: Duration in minutes, None when unknown.
        genres: Genre id and name pairs.
        tagline: Marketing tagline.
        status: Release status (e.g. Released).
        production_countries: Countries of production.
        spoken_languages: Spoken languages.
        budget: Production budget in USD (movies only).
        revenue: Box office revenue in USD (movies only).
        number_of_seasons: Season count (TV only).
        number_of_episodes: Episode count (TV only).
    """

    runtime: int | None = Field(default=None, gt=0)
    genres: list[Genre] = Field(default_factory=list)
    tagline: str = ""
    status: str = ""
    production_countries: list[ProductionCountry] = Field(default_factory=list)
    spoken_languages: list[SpokenLanguage] = Field(default_factory=list)
    budget: int | None = Field(default=None, ge=0)
    revenue: int | None = Field(default=None, ge=0)
    number_of_seasons: int | None = Field(default=None, ge=0)
    number_of_episodes: int | None = Field(default=None, ge=0)


class CastMember(BaseModel):
    """Credited cast member, lower order means higher billing."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    character: str = ""
    profile_path: str | None = None
    order: int = Field(ge=0)


class StreamingProvider(BaseModel):
    """Streaming availability for a title in one region."""

    model_config = ConfigDict(frozen=True)

    provider_id: int
    provider_name: str
    logo_path: str | None = None
    link: str = ""
    type: ProviderType
    is_available: bool = True


# =============================================================================
# PAGINATION
# =============================================================================


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of results.

    Attributes:
        items: Ordered page content.
        page: 1-based page number.
        total_pages: Pages available upstream.
        total_results: Results available upstream.
    """

    model_config = ConfigDict(frozen=True)

    items: list[T] = Field(default_factory=list)
    page: int = Field(default=1, ge=1)
    total_pages: int = Field(default=0, ge=0)
    total_results: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_items_bound(self) -> Self:
        """A page never holds more items than exist upstream."""
        if len(self.items) > self.total_results:
            raise ValueError(
                f"page holds {len(self.items)} items but total_results is "
                f"{self.total_results}"
            )
        return self

    @classmethod
    def empty(cls, page: int = 1) -> Self:
        """Build an empty page."""
        return cls(items=[], page=page, total_pages=0, total_results=0)


class SearchResults(BaseModel):
    """Multi-search results split by media type."""

    model_config = ConfigDict(frozen=True)

    movies: list[MediaItem] = Field(default_factory=list)
    tv_shows: list[MediaItem] = Field(default_factory=list)
    page: int = Field(default=1, ge=1)
    total_pages: int = Field(default=0, ge=0)
    total_results: int = Field(default=0, ge=0)


class DiscoverOptions(BaseModel):
    """Filters for discover-by-country."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    genre: int | None = None
    year: int | None = Field(default=None, ge=1874)
    sort_by: str = "popularity.desc"


# =============================================================================
# RETRY POLICY
# =============================================================================


class RetryConfig(BaseModel):
    """Bounded exponential backoff policy.

    Attributes:
        max_attempts: Total attempts, first one included.
        base_delay_ms: Delay before the first retry.
        max_delay_ms: Backoff ceiling.
    """

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=3, ge=1)
    base_delay_ms: int = Field(default=1000, gt=0)
    max_delay_ms: int = Field(default=10000, gt=0)

    @model_validator(mode="after")
    def validate_delay_bounds(self) -> Self:
        """Ensure the ceiling is not below the base delay."""
        if self.max_delay_ms < self.base_delay_ms:
            raise ValueError("max_delay_ms must be >= base_delay_ms")
        return self
