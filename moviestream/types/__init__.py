"""Raw provider response types."""

from moviestream.types.omdb import (
    OMDbDetailsData,
    OMDbErrorData,
    OMDbSearchData,
    OMDbSearchItemData,
)
from moviestream.types.tmdb import (
    TMDBCastData,
    TMDBCreditsData,
    TMDBDetailsData,
    TMDBGenreData,
    TMDBMediaData,
    TMDBPageData,
    TMDBProductionCountryData,
    TMDBSpokenLanguageData,
    TMDBVideoData,
    TMDBVideosData,
    TMDBWatchProviderData,
    TMDBWatchProvidersData,
    TMDBWatchRegionData,
)

__all__ = [
    # OMDb
    "OMDbDetailsData",
    "OMDbErrorData",
    "OMDbSearchData",
    "OMDbSearchItemData",
    # TMDB
    "TMDBCastData",
    "TMDBCreditsData",
    "TMDBDetailsData",
    "TMDBGenreData",
    "TMDBMediaData",
    "TMDBPageData",
    "TMDBProductionCountryData",
    "TMDBSpokenLanguageData",
    "TMDBVideoData",
    "TMDBVideosData",
    "TMDBWatchProviderData",
    "TMDBWatchProvidersData",
    "TMDBWatchRegionData",
]
