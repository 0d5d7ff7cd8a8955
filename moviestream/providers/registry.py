"""Provider selection and adapter construction.

The active provider is picked from an explicit enum through a static
dispatch table. The registry owns the identifier bridge and the
diagnostic sink and hands them by reference to every adapter it builds.
"""

import asyncio
import logging
from collections.abc import Callable
from enum import StrEnum
from types import TracebackType

import httpx

from moviestream.providers.base import MediaProviderAdapter
from moviestream.providers.fallback import DiagnosticSink
from moviestream.providers.identifiers import IdentifierBridge
from moviestream.providers.omdb import OMDbAdapter
from moviestream.providers.retry import RetryableFetchClient, SleepFunc
from moviestream.providers.synthetic import SyntheticAdapter
from moviestream.providers.tmdb import TMDBAdapter
from moviestream.schemas import RetryConfig
from moviestream.settings import ProviderSettings
from moviestream.settings.validation import validate_provider_config

logger = logging.getLogger(__name__)


class ProviderName(StrEnum):
    """Supported media providers."""

    TMDB = "tmdb"
    OMDB = "omdb"
    MOCK = "mock"


DEFAULT_PROVIDER = ProviderName.TMDB


def resolve_provider(
    requested: str | None = None,
    provider_settings: ProviderSettings | None = None,
) -> ProviderName:
    """Pick the active provider.

    ``USE_MOCK_DATA`` wins over everything. Unknown names fall back to
    TMDB with a warning.

    Args:
        requested: Explicit provider name, overrides ``API_PROVIDER``.
        provider_settings: Selection settings, reloaded from the
            environment when omitted.

    Returns:
        Provider to use.
    """
    current = provider_settings or ProviderSettings()
    if current.use_mock_data:
        return ProviderName.MOCK

    name = (requested or current.api_provider or DEFAULT_PROVIDER).strip().lower()
    try:
        return ProviderName(name)
    except ValueError:
        logger.warning(f"Unknown provider '{name}', falling back to {DEFAULT_PROVIDER}")
        return DEFAULT_PROVIDER


# =============================================================================
# ADAPTER FACTORIES
# =============================================================================


def _build_tmdb(registry: "ProviderRegistry") -> MediaProviderAdapter:
    return TMDBAdapter(fetcher=registry.new_fetcher())


def _build_omdb(registry: "ProviderRegistry") -> MediaProviderAdapter:
    return OMDbAdapter(
        registry.bridge,
        fetcher=registry.new_fetcher(),
        sink=registry.sink,
    )


def _build_mock(_registry: "ProviderRegistry") -> MediaProviderAdapter:
    return SyntheticAdapter()


AdapterFactory = Callable[["ProviderRegistry"], MediaProviderAdapter]

ADAPTER_FACTORIES: dict[ProviderName, AdapterFactory] = {
    ProviderName.TMDB: _build_tmdb,
    ProviderName.OMDB: _build_omdb,
    ProviderName.MOCK: _build_mock,
}


# =============================================================================
# REGISTRY
# =============================================================================


class ProviderRegistry:
    """Builds and caches one adapter per provider.

    Attributes:
        bridge: Identifier bridge shared by string-ID adapters.
        sink: Diagnostic sink for fallback usage, None for the default.
    """

    def __init__(
        self,
        bridge: IdentifierBridge | None = None,
        sink: DiagnosticSink | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        sleep: SleepFunc = asyncio.sleep,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            bridge: Identifier bridge, a fresh one when omitted.
            sink: Fallback diagnostic sink.
            http_client: HTTP client shared by every adapter (not closed
                by the registry).
            sleep: Backoff sleep used by retrying clients.
            retry_config: Retry policy override.
        """
        self.bridge = bridge if bridge is not None else IdentifierBridge()
        self.sink = sink
        self._http_client = http_client
        self._sleep = sleep
        self._retry_config = retry_config
        self._adapters: dict[ProviderName, MediaProviderAdapter] = {}

    def new_fetcher(self) -> RetryableFetchClient:
        """Create a retrying HTTP client for an adapter."""
        return RetryableFetchClient(
            self._http_client,
            sleep=self._sleep,
            default_config=self._retry_config,
        )

    def get(self, provider: ProviderName | str | None = None) -> MediaProviderAdapter:
        """Return the adapter for a provider, building it on first use.

        Args:
            provider: Provider to use, resolved from settings when omitted.

        Returns:
            Cached adapter instance.

        Raises:
            ConfigurationError: If the provider is misconfigured.
        """
        name = resolve_provider(provider)
        if name not in self._adapters:
            validate_provider_config(name)
            self._adapters[name] = ADAPTER_FACTORIES[name](self)
            logger.info(f"Using media provider: {name}")
        return self._adapters[name]

    async def aclose(self) -> None:
        """Close every adapter built so far."""
        adapters = list(self._adapters.values())
        self._adapters.clear()
        for adapter in adapters:
            await adapter.aclose()

    async def __aenter__(self) -> "ProviderRegistry":
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def create_media_api(
    provider: ProviderName | str | None = None,
    *,
    bridge: IdentifierBridge | None = None,
    sink: DiagnosticSink | None = None,
) -> MediaProviderAdapter:
    """Build a standalone adapter for the active provider.

    Configuration is validated before the adapter is created.

    Args:
        provider: Provider to use, resolved from settings when omitted.
        bridge: Identifier bridge for string-ID providers.
        sink: Fallback diagnostic sink.

    Returns:
        Adapter owning its own HTTP resources; close it with ``aclose``.
    """
    return ProviderRegistry(bridge, sink).get(provider)
