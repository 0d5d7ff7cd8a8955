"""Tests for the retrying fetch client and backoff schedule."""

import asyncio

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from moviestream.errors import (
    FetchError,
    ResponseFormatError,
    RetryExhaustedError,
    TerminalHTTPError,
    TransportError,
)
from moviestream.providers.retry import (
    RetryableFetchClient,
    calculate_backoff_delay,
    is_retryable_error,
)
from moviestream.schemas import RetryConfig
from tests.helpers import RecordingHandler, RecordingSleep

URL = "https://api.example.org/resource"

retry_configs = st.builds(
    lambda base, extra: RetryConfig(max_attempts=3, base_delay_ms=base, max_delay_ms=base + extra),
    st.integers(min_value=1, max_value=5_000),
    st.integers(min_value=0, max_value=60_000),
)


# -------------------------------------------------------------------------
# Backoff Schedule
# -------------------------------------------------------------------------


@pytest.mark.unit
class TestCalculateBackoffDelay:
    @staticmethod
    def test_doubles_until_ceiling() -> None:
        config = RetryConfig(base_delay_ms=1000, max_delay_ms=10000)
        delays = [calculate_backoff_delay(attempt, config) for attempt in range(6)]
        assert delays == [1000, 2000, 4000, 8000, 10000, 10000]

    @staticmethod
    def test_negative_attempt_rejected() -> None:
        with pytest.raises(ValueError):
            calculate_backoff_delay(-1, RetryConfig())

    @staticmethod
    @given(config=retry_configs, attempt=st.integers(min_value=0, max_value=64))
    def test_never_exceeds_ceiling(config: RetryConfig, attempt: int) -> None:
        delay = calculate_backoff_delay(attempt, config)
        assert config.base_delay_ms <= delay <= config.max_delay_ms

    @staticmethod
    @given(config=retry_configs, attempt=st.integers(min_value=0, max_value=64))
    def test_non_decreasing(config: RetryConfig, attempt: int) -> None:
        assert calculate_backoff_delay(attempt, config) <= calculate_backoff_delay(
            attempt + 1, config
        )


@pytest.mark.unit
class TestRetryConfig:
    @staticmethod
    def test_ceiling_below_base_rejected() -> None:
        with pytest.raises(ValueError):
            RetryConfig(base_delay_ms=5000, max_delay_ms=1000)

    @staticmethod
    def test_zero_attempts_rejected() -> None:
        with pytest.raises(ValueError):
            RetryConfig(max_attempts=0)


@pytest.mark.unit
def test_is_retryable_error_classification() -> None:
    assert is_retryable_error(TransportError("reset"))
    assert not is_retryable_error(TerminalHTTPError("gone", status_code=404))
    assert not is_retryable_error(ValueError("not a fetch error"))


# -------------------------------------------------------------------------
# Fetch With Retry
# -------------------------------------------------------------------------


@pytest.mark.unit
class TestFetchWithRetry:
    @staticmethod
    async def test_success_on_first_attempt(make_fetcher, recording_sleep) -> None:
        handler = RecordingHandler(httpx.Response(200, json={"ok": True}))
        fetcher = make_fetcher(handler)

        assert await fetcher.fetch_with_retry(URL) == {"ok": True}
        assert handler.calls == 1
        assert recording_sleep.delays == []

    @staticmethod
    async def test_server_error_then_success(make_fetcher, recording_sleep) -> None:
        handler = RecordingHandler(
            httpx.Response(500),
            httpx.Response(200, json={"page": 1}),
        )
        fetcher = make_fetcher(handler)

        assert await fetcher.fetch_with_retry(URL) == {"page": 1}
        assert handler.calls == 2
        assert recording_sleep.delays == [1.0]

    @staticmethod
    async def test_persistent_503_exhausts_attempts(make_fetcher, recording_sleep) -> None:
        handler = RecordingHandler(httpx.Response(503))
        fetcher = make_fetcher(handler)

        with pytest.raises(RetryExhaustedError) as exc_info:
            await fetcher.fetch_with_retry(URL)

        assert handler.calls == 3
        assert recording_sleep.delays == [1.0, 2.0]
        assert exc_info.value.attempts == 3
        assert exc_info.value.status_code == 503
        assert exc_info.value.is_retryable

    @staticmethod
    async def test_rate_limit_is_retried(make_fetcher, recording_sleep) -> None:
        handler = RecordingHandler(httpx.Response(429), httpx.Response(200, json=[]))
        fetcher = make_fetcher(handler)

        assert await fetcher.fetch_with_retry(URL) == []
        assert handler.calls == 2

    @staticmethod
    @pytest.mark.parametrize("status", [400, 401, 403, 404])
    async def test_client_error_is_terminal(make_fetcher, recording_sleep, status: int) -> None:
        handler = RecordingHandler(httpx.Response(status))
        fetcher = make_fetcher(handler)

        with pytest.raises(TerminalHTTPError) as exc_info:
            await fetcher.fetch_with_retry(URL)

        assert handler.calls == 1
        assert recording_sleep.delays == []
        assert exc_info.value.status_code == status
        assert not exc_info.value.is_retryable

    @staticmethod
    async def test_transport_failure_is_retried(make_fetcher, recording_sleep) -> None:
        handler = RecordingHandler(
            httpx.ConnectError("connection reset"),
            httpx.Response(200, json={"ok": True}),
        )
        fetcher = make_fetcher(handler)

        assert await fetcher.fetch_with_retry(URL) == {"ok": True}
        assert handler.calls == 2

    @staticmethod
    async def test_persistent_transport_failure(make_fetcher, recording_sleep) -> None:
        handler = RecordingHandler(httpx.ReadTimeout("timed out"))
        fetcher = make_fetcher(handler)

        with pytest.raises(RetryExhaustedError) as exc_info:
            await fetcher.fetch_with_retry(URL)

        assert handler.calls == 3
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, TransportError)

    @staticmethod
    async def test_invalid_json_is_not_retried(make_fetcher, recording_sleep) -> None:
        handler = RecordingHandler(httpx.Response(200, text="<html>maintenance</html>"))
        fetcher = make_fetcher(handler)

        with pytest.raises(ResponseFormatError):
            await fetcher.fetch_with_retry(URL)
        assert handler.calls == 1

    @staticmethod
    async def test_per_call_config_overrides_default(make_fetcher, recording_sleep) -> None:
        handler = RecordingHandler(httpx.Response(502))
        fetcher = make_fetcher(handler)
        single_shot = RetryConfig(max_attempts=1, base_delay_ms=10, max_delay_ms=10)

        with pytest.raises(RetryExhaustedError) as exc_info:
            await fetcher.fetch_with_retry(URL, config=single_shot)

        assert handler.calls == 1
        assert recording_sleep.delays == []
        assert exc_info.value.attempts == 1

    @staticmethod
    async def test_backoff_respects_ceiling(make_fetcher, recording_sleep) -> None:
        handler = RecordingHandler(httpx.Response(500))
        fetcher = make_fetcher(handler)
        config = RetryConfig(max_attempts=5, base_delay_ms=1000, max_delay_ms=3000)

        with pytest.raises(RetryExhaustedError):
            await fetcher.fetch_with_retry(URL, config=config)

        assert recording_sleep.delays == [1.0, 2.0, 3.0, 3.0]

    @staticmethod
    async def test_params_and_headers_forwarded(make_fetcher) -> None:
        handler = RecordingHandler(httpx.Response(200, json={}))
        fetcher = make_fetcher(handler)

        await fetcher.fetch_with_retry(URL, params={"page": 2}, headers={"X-Trace": "abc"})

        request = handler.requests[0]
        assert request.url.params["page"] == "2"
        assert request.headers["X-Trace"] == "abc"


@pytest.mark.unit
class TestClientOwnership:
    @staticmethod
    async def test_injected_client_left_open() -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(RecordingHandler()))
        fetcher = RetryableFetchClient(client)

        await fetcher.aclose()

        assert not client.is_closed
        await client.aclose()

    @staticmethod
    async def test_owned_client_closed_on_exit() -> None:
        async with RetryableFetchClient(timeout=1.0) as fetcher:
            client = fetcher._get_client()

        assert client.is_closed


# -------------------------------------------------------------------------
# Retry Properties
# -------------------------------------------------------------------------


async def _fetch(handler: RecordingHandler, config: RetryConfig) -> tuple[object, RecordingSleep]:
    """Run one fetch against ``handler``, returning the outcome and recorded sleeps."""
    sleep = RecordingSleep()
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        fetcher = RetryableFetchClient(client, sleep=sleep, default_config=config)
        try:
            outcome = await fetcher.fetch_with_retry(URL)
        except FetchError as e:
            outcome = e
    return outcome, sleep


def _fast_config(attempts: int) -> RetryConfig:
    return RetryConfig(max_attempts=attempts, base_delay_ms=1, max_delay_ms=4)


retryable_statuses = st.sampled_from([429, *range(500, 600)])
terminal_statuses = st.integers(min_value=400, max_value=499).filter(lambda s: s != 429)


@pytest.mark.unit
class TestRetryProperties:
    @staticmethod
    @settings(deadline=None, max_examples=50)
    @given(attempts=st.integers(min_value=1, max_value=8), status=retryable_statuses)
    def test_always_retryable_exhausts_every_attempt(attempts: int, status: int) -> None:
        handler = RecordingHandler(httpx.Response(status))

        outcome, sleep = asyncio.run(_fetch(handler, _fast_config(attempts)))

        assert isinstance(outcome, RetryExhaustedError)
        assert outcome.is_retryable
        assert outcome.status_code == status
        assert handler.calls == attempts
        assert len(sleep.delays) == attempts - 1

    @staticmethod
    @settings(deadline=None, max_examples=50)
    @given(attempts=st.integers(min_value=1, max_value=8), status=terminal_statuses)
    def test_client_error_makes_one_call(attempts: int, status: int) -> None:
        handler = RecordingHandler(httpx.Response(status))

        outcome, sleep = asyncio.run(_fetch(handler, _fast_config(attempts)))

        assert isinstance(outcome, TerminalHTTPError)
        assert not outcome.is_retryable
        assert outcome.status_code == status
        assert handler.calls == 1
        assert sleep.delays == []

    @staticmethod
    @settings(deadline=None, max_examples=50)
    @given(
        data=st.data(),
        attempts=st.integers(min_value=1, max_value=8),
        status=retryable_statuses,
    )
    def test_failures_then_success(data: st.DataObject, attempts: int, status: int) -> None:
        failures = data.draw(st.integers(min_value=0, max_value=attempts - 1), label="failures")
        body = {"page": failures + 1}
        handler = RecordingHandler(
            *[httpx.Response(status)] * failures, httpx.Response(200, json=body)
        )

        outcome, sleep = asyncio.run(_fetch(handler, _fast_config(attempts)))

        assert outcome == body
        assert handler.calls == failures + 1
        assert len(sleep.delays) == failures
