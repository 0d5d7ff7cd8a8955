"""Test doubles shared across provider tests."""

import httpx

MATRIX_POSTER = (
    "https://m.media-amazon.com/images/M/"
    "MV5BNzQzOTk3OTAtNDQ0Zi00ZTVkLWI0MTEtMDllZjNkYzNjNTc4L2ltYWdlXkEyXkFqcGdeQXVyNjU0OTQ0OTY@._V1_SX300.jpg"
)


class RecordingSleep:
    """Awaitable sleep that records requested delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class RecordingHandler:
    """MockTransport handler that records requests.

    Responses are taken from ``responses`` in order, the last one is
    repeated. Exceptions in the list are raised instead.
    """

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.responses)) - 1
        outcome = self.responses[index]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def calls(self) -> int:
        return len(self.requests)


class RoutingHandler:
    """MockTransport handler answering by URL path.

    ``routes`` maps a path (``/3/movie/603``) to a JSON body or a ready
    response. Unknown paths answer 404.
    """

    def __init__(self, routes: dict[str, object]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = self.routes.get(request.url.path)
        if body is None:
            return httpx.Response(404, json={"status_message": "not found"})
        if isinstance(body, httpx.Response):
            return body
        return httpx.Response(200, json=body)

    def params(self, index: int = -1) -> dict[str, str]:
        return dict(self.requests[index].url.params)


class OMDbHandler:
    """MockTransport handler emulating the OMDb query-string API.

    Args:
        searches: Search term -> payload. Unknown terms answer "Movie not found!".
        titles: IMDb id -> detail payload. Unknown ids answer "Incorrect IMDb ID.".
    """

    def __init__(
        self,
        searches: dict[str, dict] | None = None,
        titles: dict[str, dict] | None = None,
    ) -> None:
        self.searches = searches or {}
        self.titles = titles or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params
        if "s" in params:
            body = self.searches.get(params["s"]) or {
                "Response": "False",
                "Error": "Movie not found!",
            }
        else:
            body = self.titles.get(params.get("i", "")) or {
                "Response": "False",
                "Error": "Incorrect IMDb ID.",
            }
        return httpx.Response(200, json=body)

    def params(self, index: int = -1) -> dict[str, str]:
        return dict(self.requests[index].url.params)
