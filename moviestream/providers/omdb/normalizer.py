"""OMDb data normalizer.

OMDb returns every field as a display string ("148 min", "1,234,567",
"N/A"). This module parses those strings and maps OMDb payloads onto the
shared schemas, registering every IMDb id with the identifier bridge.
"""

import logging
import re
from datetime import datetime
from urllib.parse import urlparse

from moviestream.providers.identifiers import IdentifierBridge, cast_member_id
from moviestream.schemas import (
    CastMember,
    Genre,
    MediaDetails,
    MediaItem,
    MediaType,
    ProductionCountry,
    SearchResults,
    SpokenLanguage,
)
from moviestream.types.omdb import OMDbDetailsData, OMDbSearchItemData

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

# TMDB genre ids, so OMDb genres line up with the rest of the app
GENRE_IDS: dict[str, int] = {
    "Action": 28,
    "Adventure": 12,
    "Animation": 16,
    "Comedy": 35,
    "Crime": 80,
    "Documentary": 99,
    "Drama": 18,
    "Family": 10751,
    "Fantasy": 14,
    "History": 36,
    "Horror": 27,
    "Music": 10402,
    "Mystery": 9648,
    "Romance": 10749,
    "Science Fiction": 878,
    "Sci-Fi": 878,
    "TV Movie": 10770,
    "Thriller": 53,
    "War": 10752,
    "Western": 37,
}

COUNTRY_CODES: dict[str, str] = {
    "United States": "US",
    "USA": "US",
    "United Kingdom": "GB",
    "UK": "GB",
    "Canada": "CA",
    "Australia": "AU",
    "Germany": "DE",
    "France": "FR",
    "Italy": "IT",
    "Spain": "ES",
    "Japan": "JP",
    "South Korea": "KR",
    "China": "CN",
    "India": "IN",
    "Russia": "RU",
    "Brazil": "BR",
    "Mexico": "MX",
}

LANGUAGE_CODES: dict[str, str] = {
    "English": "en",
    "Spanish": "es",
    "French": "fr",
    "German": "de",
    "Italian": "it",
    "Portuguese": "pt",
    "Russian": "ru",
    "Japanese": "ja",
    "Korean": "ko",
    "Chinese": "zh",
    "Hindi": "hi",
    "Arabic": "ar",
}

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")
IMAGE_PATH_HINTS = ("img", "poster", "image")
IMAGE_HOST_HINTS = ("media-amazon", "imdb")

_DIGITS = re.compile(r"(\d+)")
_YEAR = re.compile(r"(\d{4})")


# =============================================================================
# FIELD PARSERS
# =============================================================================


def _missing(value: str | None) -> bool:
    return not value or value == NOT_AVAILABLE


def parse_runtime(value: str | None) -> int | None:
    """Parse "148 min" to 148, None when unavailable."""
    if _missing(value):
        return None
    match = _DIGITS.search(value)
    if not match:
        return None
    minutes = int(match.group(1))
    return minutes if minutes > 0 else None


def parse_vote_count(value: str | None) -> int:
    """Parse "1,234,567" to 1234567, 0 when unavailable."""
    if _missing(value):
        return 0
    try:
        return int(value.replace(",", ""))
    except ValueError:
        return 0


def parse_rating(value: str | None) -> float | None:
    """Parse an IMDb rating ("8.7"), None when unavailable."""
    if _missing(value):
        return None
    try:
        rating = float(value)
    except ValueError:
        return None
    return rating if 0 <= rating <= 10 else None


def parse_year(value: str | None) -> str:
    """First year of "2020", "2020–2023" or "2020–" as "2020-01-01"."""
    if _missing(value):
        return ""
    match = _YEAR.search(value)
    return f"{match.group(1)}-01-01" if match else ""


def parse_released(value: str | None) -> str:
    """Parse "25 Dec 2023" to "2023-12-25", empty when unparseable."""
    if _missing(value):
        return ""
    try:
        return datetime.strptime(value.strip(), "%d %b %Y").date().isoformat()
    except ValueError:
        return ""


def split_names(value: str | None) -> list[str]:
    """Split a comma-separated OMDb list, dropping blanks."""
    if _missing(value) or not value.strip():
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


def genre_id(name: str) -> int:
    """TMDB genre id for a genre name, char-code sum for unknown genres."""
    return GENRE_IDS.get(name) or sum(ord(char) for char in name)


def parse_genres(value: str | None) -> list[Genre]:
    """Parse "Action, Sci-Fi" to Genre pairs."""
    return [Genre(id=genre_id(name), name=name) for name in split_names(value)]


def parse_countries(value: str | None) -> list[ProductionCountry]:
    """Parse country names, mapping known names to ISO 3166-1 codes."""
    return [
        ProductionCountry(
            iso_3166_1=COUNTRY_CODES.get(name, name[:2].upper()),
            name=name,
        )
        for name in split_names(value)
    ]


def parse_languages(value: str | None) -> list[SpokenLanguage]:
    """Parse language names, mapping known names to ISO 639-1 codes."""
    return [
        SpokenLanguage(
            iso_639_1=LANGUAGE_CODES.get(name, name[:2].lower()),
            name=name,
            english_name=name,
        )
        for name in split_names(value)
    ]


def normalize_poster_url(value: str | None) -> str | None:
    """Keep absolute http(s) poster URLs, None otherwise."""
    if _missing(value):
        return None
    if value.startswith(("http://", "https://")):
        return value
    return None


def validate_poster_url(value: str | None) -> str | None:
    """Stricter poster check used for image URLs.

    Accepts http(s) URLs whose path ends with an image extension or
    that look like an image/IMDb media URL.
    """
    if normalize_poster_url(value) is None:
        return None

    parsed = urlparse(value)
    if not parsed.hostname:
        return None

    path = parsed.path.lower()
    if path.endswith(IMAGE_EXTENSIONS):
        return value
    if any(hint in path for hint in IMAGE_PATH_HINTS):
        return value
    if any(hint in parsed.hostname for hint in IMAGE_HOST_HINTS):
        return value
    return None


def map_media_type(omdb_type: str | None) -> MediaType:
    """OMDb ``movie`` stays movie, ``series`` and ``episode`` become tv."""
    return "movie" if omdb_type == "movie" else "tv"


# =============================================================================
# NORMALIZER
# =============================================================================


class OMDbNormalizer:
    """Maps OMDb payloads to shared schemas.

    Every IMDb id seen is registered with the shared identifier bridge so
    later lookups by numeric id can be resolved.
    """

    def __init__(self, bridge: IdentifierBridge) -> None:
        self.bridge = bridge

    def normalize_item(self, raw: OMDbSearchItemData | OMDbDetailsData) -> MediaItem:
        """Map a search hit (or detail payload) to MediaItem."""
        title = raw.get("Title") or ""
        plot = raw.get("Plot")
        return MediaItem(
            id=self.bridge.generate_numeric_id(raw["imdbID"]),
            title=title,
            original_title=title,
            poster_path=normalize_poster_url(raw.get("Poster")),
            backdrop_path=None,
            overview="" if _missing(plot) else plot,
            release_date=parse_year(raw.get("Year")),
            vote_average=parse_rating(raw.get("imdbRating")),
            vote_count=parse_vote_count(raw.get("imdbVotes")),
            media_type=map_media_type(raw.get("Type")),
            genre_ids=[g.id for g in parse_genres(raw.get("Genre"))],
        )

    def normalize_items(self, results: list[OMDbSearchItemData]) -> list[MediaItem]:
        """Map search hits, skipping entries without an IMDb id."""
        items = []
        for raw in results:
            try:
                items.append(self.normalize_item(raw))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Failed to normalize OMDb item {raw.get('imdbID')}: {e}")
        return items

    def normalize_search(
        self,
        results: list[OMDbSearchItemData],
        page: int,
        total_results: int,
        total_pages: int,
    ) -> SearchResults:
        """Split search hits into movies and TV shows."""
        items = self.normalize_items(results)
        return SearchResults(
            movies=[item for item in items if item.media_type == "movie"],
            tv_shows=[item for item in items if item.media_type == "tv"],
            page=page,
            total_pages=total_pages,
            total_results=max(total_results, len(items)),
        )

    def normalize_details(self, raw: OMDbDetailsData) -> MediaDetails:
        """Map a detail payload to MediaDetails.

        OMDb has no tagline, backdrop or release status: titles it knows
        are reported as Released.
        """
        item = self.normalize_item(raw)
        genres = parse_genres(raw.get("Genre"))
        media_type = item.media_type

        seasons = None
        if media_type == "tv":
            seasons_raw = raw.get("totalSeasons")
            if not _missing(seasons_raw) and seasons_raw.isdigit():
                seasons = int(seasons_raw)

        fields = item.model_dump()
        fields["release_date"] = parse_released(raw.get("Released")) or item.release_date

        return MediaDetails(
            **fields,
            runtime=parse_runtime(raw.get("Runtime")),
            genres=genres,
            tagline="",
            status="Released",
            production_countries=parse_countries(raw.get("Country")),
            spoken_languages=parse_languages(raw.get("Language")),
            number_of_seasons=seasons,
        )

    # -------------------------------------------------------------------------
    # Credits
    # -------------------------------------------------------------------------

    @staticmethod
    def normalize_cast(raw: OMDbDetailsData) -> list[CastMember]:
        """Actors in billing order, with ids derived from their names."""
        return [
            CastMember(
                id=cast_member_id(name),
                name=name,
                character="",
                profile_path=None,
                order=index,
            )
            for index, name in enumerate(split_names(raw.get("Actors")))
        ]
