"""TMDB data normalizer.

Transforms raw TMDB API responses into the shared media schemas.
"""

import logging

from moviestream.schemas import (
    CastMember,
    Genre,
    MediaDetails,
    MediaItem,
    MediaType,
    ProductionCountry,
    SearchResults,
    SpokenLanguage,
    StreamingProvider,
    TrendingItem,
)
from moviestream.types.tmdb import (
    TMDBCreditsData,
    TMDBDetailsData,
    TMDBMediaData,
    TMDBPageData,
    TMDBVideosData,
    TMDBWatchProvidersData,
)

logger = logging.getLogger(__name__)


class TMDBNormalizer:
    """Normalizes TMDB API data into shared schemas.

    Movies and TV shows differ only in field names: movies use
    ``title``/``release_date``, TV shows ``name``/``first_air_date``.
    """

    PAGE_SIZE = 20
    PROVIDER_TYPES = ("flatrate", "rent", "buy")

    # -------------------------------------------------------------------------
    # Media Items
    # -------------------------------------------------------------------------

    @staticmethod
    def _media_fields(raw: TMDBMediaData, media_type: MediaType) -> dict:
        """Extract MediaItem fields shared by list and detail payloads."""
        if media_type == "tv":
            title = raw.get("name", "")
            original_title = raw.get("original_name", title)
            release_date = raw.get("first_air_date") or ""
        else:
            title = raw.get("title", "")
            original_title = raw.get("original_title", title)
            release_date = raw.get("release_date") or ""

        return {
            "id": raw["id"],
            "title": title,
            "original_title": original_title or "",
            "poster_path": raw.get("poster_path"),
            "backdrop_path": raw.get("backdrop_path"),
            "overview": raw.get("overview") or "",
            "release_date": release_date,
            # TMDB reports unrated titles as 0
            "vote_average": raw.get("vote_average") or None,
            "vote_count": raw.get("vote_count") or 0,
            "media_type": media_type,
            "genre_ids": list(raw.get("genre_ids", [])),
        }

    def normalize_item(self, raw: TMDBMediaData, media_type: MediaType) -> MediaItem:
        """Normalize a list entry to MediaItem."""
        return MediaItem(**self._media_fields(raw, media_type))

    @staticmethod
    def resolve_media_type(
        raw: TMDBMediaData, default: MediaType | None = None
    ) -> MediaType | None:
        """Media type of a list entry, None for people and unknown types."""
        kind = raw.get("media_type", default)
        if kind in ("movie", "tv"):
            return kind
        return None

    def normalize_items(
        self,
        results: list[TMDBMediaData],
        default_type: MediaType | None = None,
    ) -> list[MediaItem]:
        """Normalize list entries, skipping people and malformed entries."""
        items = []
        for raw in results:
            media_type = self.resolve_media_type(raw, default_type)
            if media_type is None:
                continue
            try:
                items.append(self.normalize_item(raw, media_type))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Failed to normalize TMDB item {raw.get('id')}: {e}")
        return items

    def normalize_ranked(
        self,
        page_data: TMDBPageData,
        page: int,
        default_type: MediaType | None = None,
    ) -> list[TrendingItem]:
        """Normalize a ranked list page.

        Ranks continue across pages (20 per page) and follow the upstream
        position, so skipped people leave gaps but order is preserved.
        """
        offset = (page - 1) * self.PAGE_SIZE
        items = []
        for index, raw in enumerate(page_data.get("results", [])):
            media_type = self.resolve_media_type(raw, default_type)
            if media_type is None:
                continue
            try:
                items.append(
                    TrendingItem(
                        **self._media_fields(raw, media_type),
                        rank=offset + index + 1,
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Failed to normalize TMDB item {raw.get('id')}: {e}")
        return items

    def normalize_search(self, page_data: TMDBPageData) -> SearchResults:
        """Split a multi-search page into movies and TV shows."""
        items = self.normalize_items(page_data.get("results", []))
        total_results = page_data.get("total_results", 0)
        return SearchResults(
            movies=[item for item in items if item.media_type == "movie"],
            tv_shows=[item for item in items if item.media_type == "tv"],
            page=page_data.get("page", 1),
            total_pages=page_data.get("total_pages", 0),
            total_results=max(total_results, len(items)),
        )

    # -------------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------------

    def normalize_details(
        self,
        raw: TMDBDetailsData,
        media_type: MediaType,
    ) -> MediaDetails:
        """Normalize a detail payload.

        TV runtime is the first episode runtime, None when unknown.
        """
        fields = self._media_fields(raw, media_type)
        genres = [Genre(id=g["id"], name=g["name"]) for g in raw.get("genres", [])]
        fields["genre_ids"] = [g.id for g in genres]

        if media_type == "tv":
            run_times = raw.get("episode_run_time") or []
            runtime = run_times[0] if run_times else None
            extra = {
                "number_of_seasons": raw.get("number_of_seasons"),
                "number_of_episodes": raw.get("number_of_episodes"),
            }
        else:
            runtime = raw.get("runtime")
            extra = {
                "budget": raw.get("budget"),
                "revenue": raw.get("revenue"),
            }

        return MediaDetails(
            **fields,
            **extra,
            runtime=runtime or None,
            genres=genres,
            tagline=raw.get("tagline") or "",
            status=raw.get("status") or "",
            production_countries=[
                ProductionCountry(iso_3166_1=c["iso_3166_1"], name=c["name"])
                for c in raw.get("production_countries", [])
            ],
            spoken_languages=[
                SpokenLanguage(
                    iso_639_1=lang["iso_639_1"],
                    name=lang["name"],
                    english_name=lang.get("english_name", ""),
                )
                for lang in raw.get("spoken_languages", [])
            ],
        )

    # -------------------------------------------------------------------------
    # Credits, Providers, Videos
    # -------------------------------------------------------------------------

    @staticmethod
    def normalize_credits(raw: TMDBCreditsData) -> list[CastMember]:
        """Normalize cast, ordered by billing."""
        cast = [
            CastMember(
                id=member["id"],
                name=member["name"],
                character=member.get("character") or "",
                profile_path=member.get("profile_path"),
                order=member.get("order", index),
            )
            for index, member in enumerate(raw.get("cast", []))
        ]
        return sorted(cast, key=lambda member: member.order)

    def normalize_watch_providers(
        self,
        raw: TMDBWatchProvidersData,
        region: str,
    ) -> list[StreamingProvider]:
        """Flatten a region's flatrate, rent and buy offers.

        Every offer carries the region-level TMDB watch link.
        """
        region_data = raw.get("results", {}).get(region.upper())
        if not region_data:
            return []

        link = region_data.get("link", "")
        providers = []
        for provider_type in self.PROVIDER_TYPES:
            for entry in region_data.get(provider_type, []):
                providers.append(
                    StreamingProvider(
                        provider_id=entry["provider_id"],
                        provider_name=entry["provider_name"],
                        logo_path=entry.get("logo_path"),
                        link=link,
                        type=provider_type,
                        is_available=True,
                    )
                )
        return providers

    @staticmethod
    def select_trailer_key(raw: TMDBVideosData) -> str | None:
        """Pick the best YouTube video key.

        Preference: official trailer, any trailer, any YouTube video.
        """
        youtube = [v for v in raw.get("results", []) if v.get("site") == "YouTube"]
        trailers = [v for v in youtube if v.get("type") == "Trailer"]
        official = [v for v in trailers if v.get("official")]

        for candidates in (official, trailers, youtube):
            if candidates:
                return candidates[0].get("key") or None
        return None
