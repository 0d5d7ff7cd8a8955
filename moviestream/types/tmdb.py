"""TMDB API data types.

TypedDict definitions for data structures returned by
The Movie Database (TMDB) API endpoints.
"""

from typing import NotRequired, TypedDict


class TMDBGenreData(TypedDict):
    """Genre data from TMDB API."""

    id: int
    name: str


class TMDBMediaData(TypedDict):
    """Movie, TV or person entry from list endpoints.

    Movies carry ``title``/``release_date``, TV shows carry
    ``name``/``first_air_date``.
    """

    id: int
    media_type: NotRequired[str]
    title: NotRequired[str]
    name: NotRequired[str]
    original_title: NotRequired[str]
    original_name: NotRequired[str]
    overview: NotRequired[str]
    poster_path: NotRequired[str | None]
    backdrop_path: NotRequired[str | None]
    release_date: NotRequired[str]
    first_air_date: NotRequired[str]
    vote_average: NotRequired[float]
    vote_count: NotRequired[int]
    genre_ids: NotRequired[list[int]]


class TMDBProductionCountryData(TypedDict):
    """Production country data from TMDB API."""

    iso_3166_1: str
    name: str


class TMDBSpokenLanguageData(TypedDict):
    """Spoken language data from TMDB API."""

    iso_639_1: str
    name: str
    english_name: NotRequired[str]


class TMDBDetailsData(TMDBMediaData):
    """Detail endpoint payload for movies and TV shows."""

    genres: NotRequired[list[TMDBGenreData]]
    runtime: NotRequired[int | None]
    episode_run_time: NotRequired[list[int]]
    tagline: NotRequired[str | None]
    status: NotRequired[str]
    production_countries: NotRequired[list[TMDBProductionCountryData]]
    spoken_languages: NotRequired[list[TMDBSpokenLanguageData]]
    budget: NotRequired[int]
    revenue: NotRequired[int]
    number_of_seasons: NotRequired[int]
    number_of_episodes: NotRequired[int]


class TMDBPageData(TypedDict):
    """Paginated list response from TMDB API."""

    page: int
    results: list[TMDBMediaData]
    total_pages: int
    total_results: int


class TMDBCastData(TypedDict):
    """Cast member data from TMDB credits endpoint."""

    id: int
    name: str
    character: NotRequired[str]
    order: NotRequired[int]
    profile_path: NotRequired[str | None]


class TMDBCreditsData(TypedDict):
    """Credits data from TMDB API."""

    id: NotRequired[int]
    cast: list[TMDBCastData]


class TMDBWatchProviderData(TypedDict):
    """Single provider entry in a watch/providers region block."""

    provider_id: int
    provider_name: str
    logo_path: NotRequired[str | None]
    display_priority: NotRequired[int]


class TMDBWatchRegionData(TypedDict):
    """Watch/providers data for a single region."""

    link: NotRequired[str]
    flatrate: NotRequired[list[TMDBWatchProviderData]]
    rent: NotRequired[list[TMDBWatchProviderData]]
    buy: NotRequired[list[TMDBWatchProviderData]]


class TMDBWatchProvidersData(TypedDict):
    """Watch/providers response keyed by region code."""

    id: NotRequired[int]
    results: dict[str, TMDBWatchRegionData]


class TMDBVideoData(TypedDict):
    """Video data from TMDB videos endpoint."""

    key: str
    site: str
    type: str
    name: NotRequired[str]
    official: NotRequired[bool]


class TMDBVideosData(TypedDict):
    """Videos response from TMDB API."""

    id: NotRequired[int]
    results: list[TMDBVideoData]
