"""Shared pytest fixtures for provider tests."""

from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest

from moviestream.providers.identifiers import IdentifierBridge
from moviestream.providers.retry import RetryableFetchClient
from moviestream.schemas import RetryConfig
from moviestream.settings import OMDbSettings, TMDBSettings
from tests.helpers import MATRIX_POSTER, RecordingSleep

Handler = Callable[[httpx.Request], httpx.Response]

TEST_TMDB_KEY = "test_tmdb_key_1234567890"
TEST_OMDB_KEY = "test_omdb_key"


@pytest.fixture(autouse=True)
def mock_env_for_tests(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from the developer environment."""
    monkeypatch.setenv("TMDB_API_KEY", TEST_TMDB_KEY)
    monkeypatch.setenv("OMDB_API_KEY", TEST_OMDB_KEY)
    monkeypatch.setenv("API_PROVIDER", "tmdb")
    monkeypatch.setenv("USE_MOCK_DATA", "false")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.delenv("LOG_DIR", raising=False)


# -------------------------------------------------------------------------
# Test Doubles
# -------------------------------------------------------------------------


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def diagnostics() -> list[str]:
    """Diagnostic sink storage; pass ``diagnostics.append`` as the sink."""
    return []


@pytest.fixture
def bridge() -> IdentifierBridge:
    return IdentifierBridge()


@pytest.fixture
def retry_config() -> RetryConfig:
    return RetryConfig(max_attempts=3, base_delay_ms=1000, max_delay_ms=10000)


@pytest.fixture
async def make_fetcher(
    recording_sleep: RecordingSleep,
    retry_config: RetryConfig,
) -> AsyncIterator[Callable[[Handler], RetryableFetchClient]]:
    """Factory building fetch clients backed by an httpx MockTransport."""
    clients: list[httpx.AsyncClient] = []

    def factory(handler: Handler) -> RetryableFetchClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return RetryableFetchClient(client, sleep=recording_sleep, default_config=retry_config)

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture
def tmdb_config() -> TMDBSettings:
    return TMDBSettings(_env_file=None, TMDB_API_KEY=TEST_TMDB_KEY)


@pytest.fixture
def omdb_config() -> OMDbSettings:
    return OMDbSettings(_env_file=None, OMDB_API_KEY=TEST_OMDB_KEY)


# -------------------------------------------------------------------------
# TMDB Payloads
# -------------------------------------------------------------------------


@pytest.fixture
def tmdb_movie() -> dict[str, Any]:
    return {
        "id": 603,
        "media_type": "movie",
        "title": "The Matrix",
        "original_title": "The Matrix",
        "overview": "Set in the 22nd century, The Matrix tells the story of a computer hacker.",
        "release_date": "1999-03-30",
        "vote_average": 8.2,
        "vote_count": 24000,
        "poster_path": "/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg",
        "backdrop_path": "/ncEsesgOJDNrTUED89hYbA117wo.jpg",
        "genre_ids": [28, 878],
    }


@pytest.fixture
def tmdb_tv() -> dict[str, Any]:
    return {
        "id": 1396,
        "media_type": "tv",
        "name": "Breaking Bad",
        "original_name": "Breaking Bad",
        "overview": "A chemistry teacher turns to manufacturing meth.",
        "first_air_date": "2008-01-20",
        "vote_average": 8.9,
        "vote_count": 13000,
        "poster_path": "/ggFHVNu6YYI5L9pCfOacjizRGt.jpg",
        "backdrop_path": None,
        "genre_ids": [18, 80],
    }


@pytest.fixture
def tmdb_person() -> dict[str, Any]:
    return {"id": 6384, "media_type": "person", "name": "Keanu Reeves"}


# -------------------------------------------------------------------------
# OMDb Payloads
# -------------------------------------------------------------------------


@pytest.fixture
def omdb_search_payload() -> dict[str, Any]:
    return {
        "Search": [
            {
                "Title": "The Matrix",
                "Year": "1999",
                "imdbID": "tt0133093",
                "Type": "movie",
                "Poster": MATRIX_POSTER,
            },
            {
                "Title": "The Matrix Reloaded",
                "Year": "2003",
                "imdbID": "tt0234215",
                "Type": "movie",
                "Poster": "N/A",
            },
            {
                "Title": "The Animatrix",
                "Year": "2003",
                "imdbID": "tt0328832",
                "Type": "series",
                "Poster": "N/A",
            },
        ],
        "totalResults": "3",
        "Response": "True",
    }


@pytest.fixture
def omdb_details_payload() -> dict[str, Any]:
    return {
        "Title": "The Matrix",
        "Year": "1999",
        "Rated": "R",
        "Released": "31 Mar 1999",
        "Runtime": "136 min",
        "Genre": "Action, Sci-Fi",
        "Director": "Lana Wachowski, Lilly Wachowski",
        "Actors": "Keanu Reeves, Laurence Fishburne, Carrie-Anne Moss",
        "Plot": "When a beautiful stranger leads computer hacker Neo to a forbidding "
        "underworld, he discovers the shocking truth.",
        "Language": "English",
        "Country": "United States, Australia",
        "Poster": MATRIX_POSTER,
        "imdbRating": "8.7",
        "imdbVotes": "2,100,000",
        "imdbID": "tt0133093",
        "Type": "movie",
        "Response": "True",
    }
