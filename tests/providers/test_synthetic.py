"""Tests for the offline synthetic provider."""

import pytest

from moviestream.errors import EntityNotFoundError
from moviestream.providers.synthetic import SyntheticAdapter
from moviestream.providers.synthetic.data import (
    MOCK_CAST,
    MOCK_TRAILER_KEY,
    PLACEHOLDER_IMAGE_URL,
)
from moviestream.schemas import DiscoverOptions


@pytest.fixture
def adapter() -> SyntheticAdapter:
    return SyntheticAdapter()


@pytest.mark.unit
class TestSyntheticLists:
    @staticmethod
    async def test_trending_all_mixes_movies_and_shows(adapter) -> None:
        result = await adapter.get_trending()

        assert [item.media_type for item in result.items] == ["movie"] * 3 + ["tv"] * 2
        assert [item.rank for item in result.items] == [1, 2, 3, 4, 5]
        assert result.total_pages == 1
        assert result.total_results == 5

    @staticmethod
    @pytest.mark.parametrize(("media_type", "count"), [("movie", 5), ("tv", 3)])
    async def test_trending_by_type(adapter, media_type, count) -> None:
        result = await adapter.get_trending(media_type, "day")

        assert len(result.items) == count
        assert {item.media_type for item in result.items} == {media_type}

    @staticmethod
    async def test_search_matches_title_or_overview(adapter) -> None:
        by_title = await adapter.search_multi("paris")
        by_overview = await adapter.search_multi("ASTRONAUTS")

        assert [item.title for item in by_title.movies] == ["Love in Paris"]
        assert [item.title for item in by_overview.tv_shows] == ["Space Explorers"]
        assert by_overview.total_results == 1

    @staticmethod
    async def test_blank_search(adapter) -> None:
        results = await adapter.search_multi(" ")
        assert results.total_results == 0

    @staticmethod
    async def test_recommendations_capped(adapter) -> None:
        result = await adapter.get_recommendations("movie", 1)
        assert len(result.items) == 5

    @staticmethod
    async def test_discover_is_ranked(adapter) -> None:
        result = await adapter.discover_by_country("tv", "KR", DiscoverOptions(page=2))

        assert result.page == 2
        assert [item.rank for item in result.items] == [21, 22, 23]


@pytest.mark.unit
class TestSyntheticTitles:
    @staticmethod
    async def test_curated_movie_details(adapter) -> None:
        details = await adapter.get_details("movie", 1)

        assert details.runtime == 142
        assert details.tagline == "Every legend has a beginning"
        assert details.budget == 180_000_000

    @staticmethod
    async def test_curated_tv_details(adapter) -> None:
        details = await adapter.get_details("tv", 101)

        assert details.number_of_seasons == 3
        assert details.status == "Returning Series"

    @staticmethod
    async def test_generic_details_for_catalog_titles(adapter) -> None:
        movie = await adapter.get_details("movie", 2)
        show = await adapter.get_details("tv", 103)

        assert movie.title == "Mystery of the Deep"
        assert movie.runtime == 120
        assert show.number_of_seasons == 2

    @staticmethod
    async def test_unknown_title(adapter) -> None:
        with pytest.raises(EntityNotFoundError):
            await adapter.get_details("movie", 999)

    @staticmethod
    async def test_credits_are_copies(adapter) -> None:
        cast = await adapter.get_credits("movie", 1)
        cast.clear()

        assert len(await adapter.get_credits("movie", 1)) == len(MOCK_CAST)

    @staticmethod
    async def test_constant_capabilities(adapter) -> None:
        providers = await adapter.get_watch_providers("movie", 1, "FR")

        assert [p.provider_name for p in providers] == ["Netflix", "Amazon Prime", "Disney+"]
        assert await adapter.get_trailer_key("tv", 101) == MOCK_TRAILER_KEY

    @staticmethod
    def test_image_url(adapter) -> None:
        assert adapter.get_image_url("/mock-placeholder") == PLACEHOLDER_IMAGE_URL
        assert adapter.get_image_url(None) is None
