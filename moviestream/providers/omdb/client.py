"""OMDb API client.

OMDb answers most failures with HTTP 200 and a ``{"Response": "False",
"Error": "..."}`` body, so error bodies are classified here into
ProviderResponseError codes on top of the fetch client's HTTP taxonomy.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, cast

from moviestream.errors import EntityNotFoundError, ProviderResponseError
from moviestream.providers.retry import RetryableFetchClient
from moviestream.schemas import RetryConfig
from moviestream.settings import OMDbSettings, settings
from moviestream.types.omdb import OMDbDetailsData, OMDbSearchData, OMDbSearchItemData

logger = logging.getLogger(__name__)

RESULTS_PER_PAGE = 10

# Substring of the lowercased error message -> error code, first match wins
_ERROR_CODES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("invalid api key", "no api key"), "INVALID_API_KEY"),
    (("not found",), "NOT_FOUND"),
    (("too many results",), "TOO_MANY_RESULTS"),
    (("incorrect imdb id",), "INCORRECT_IMDB_ID"),
    (("parameter",), "PARAMETER_ERROR"),
    (("request limit", "daily limit"), "REQUEST_LIMIT"),
)


def parse_error_code(message: str) -> str:
    """Classify an OMDb error message.

    Args:
        message: ``Error`` field of an OMDb response.

    Returns:
        Error code, ``OMDB_ERROR`` when unrecognized.
    """
    lowered = message.lower()
    for needles, code in _ERROR_CODES:
        if any(needle in lowered for needle in needles):
            return code
    return "OMDB_ERROR"


@dataclass
class OMDbSearchPage:
    """Raw search hits with pagination counters.

    Attributes:
        items: Search hits for this page (at most 10).
        page: 1-based page number.
        total_results: Hits across all pages.
    """

    items: list[OMDbSearchItemData]
    page: int
    total_results: int

    def __post_init__(self) -> None:
        self.total_results = max(self.total_results, len(self.items))

    @property
    def total_pages(self) -> int:
        """Pages available at 10 results per page."""
        return math.ceil(self.total_results / RESULTS_PER_PAGE)

    @classmethod
    def empty(cls, page: int) -> "OMDbSearchPage":
        return cls([], page, 0)


class OMDbClient:
    """HTTP client for the OMDb API."""

    def __init__(
        self,
        fetcher: RetryableFetchClient,
        config: OMDbSettings | None = None,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """Initialize OMDb client.

        Args:
            fetcher: Shared retrying HTTP client.
            config: OMDb settings, defaults to global settings.
            retry_config: Retry policy override for every call.
        """
        cfg = config or settings.omdb
        self._fetcher = fetcher
        self._base_url = f"{cfg.base_url}/"
        self._api_key = cfg.api_key.strip()
        self._retry_config = retry_config

    async def aclose(self) -> None:
        """Close the underlying fetch client."""
        await self._fetcher.aclose()

    async def _get(self, params: dict[str, Any]) -> dict[str, Any]:
        """Execute GET request and reject OMDb error bodies.

        Raises:
            ProviderResponseError: When the body reports ``Response: False``.
            FetchError: On HTTP or transport errors.
        """
        request_params = {"apikey": self._api_key}
        request_params.update({k: v for k, v in params.items() if v is not None})

        data = await self._fetcher.fetch_with_retry(
            self._base_url,
            params=request_params,
            config=self._retry_config,
        )

        if not isinstance(data, dict):
            raise ProviderResponseError("Unexpected OMDb payload", "OMDB_ERROR")

        if data.get("Response") == "False":
            message = data.get("Error", "Unknown OMDb error")
            raise ProviderResponseError(message, parse_error_code(message))

        return data

    # -------------------------------------------------------------------------
    # API Endpoints
    # -------------------------------------------------------------------------

    async def search(
        self,
        query: str,
        page: int = 1,
        search_type: str | None = None,
        year: int | None = None,
    ) -> OMDbSearchPage:
        """Search titles by keyword.

        "Not found" and "too many results" are reported as an empty page.

        Args:
            query: Search keywords.
            page: Page number, 10 results per page.
            search_type: movie, series or episode.
            year: Release year filter.

        Returns:
            Raw search hits.
        """
        if not query.strip():
            return OMDbSearchPage.empty(page)

        try:
            data = await self._get(
                {"s": query.strip(), "page": page, "type": search_type, "y": year}
            )
        except ProviderResponseError as e:
            if e.code == "NOT_FOUND":
                return OMDbSearchPage.empty(page)
            if e.code == "TOO_MANY_RESULTS":
                logger.warning(f"OMDb search too broad for '{query}', returning no results")
                return OMDbSearchPage.empty(page)
            raise

        response = cast(OMDbSearchData, data)
        try:
            total_results = int(response.get("totalResults", "0"))
        except ValueError:
            total_results = 0
        return OMDbSearchPage(list(response.get("Search", [])), page, total_results)

    async def details(self, imdb_id: str, plot: str = "full") -> OMDbDetailsData:
        """Get title details by IMDb id.

        Raises:
            ProviderResponseError: If the id is not an IMDb ``tt`` id.
            EntityNotFoundError: If OMDb has no such title.
        """
        if not imdb_id.startswith("tt"):
            raise ProviderResponseError(
                'Invalid IMDb ID format. Must start with "tt"', "INVALID_IMDB_ID"
            )

        try:
            data = await self._get({"i": imdb_id, "plot": plot})
        except ProviderResponseError as e:
            if e.code in ("NOT_FOUND", "INCORRECT_IMDB_ID"):
                raise EntityNotFoundError("omdb", imdb_id) from e
            raise

        return cast(OMDbDetailsData, data)
