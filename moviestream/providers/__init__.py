"""Media provider adapters and their shared building blocks.

Usage:
    from moviestream.providers import ProviderRegistry

    async with ProviderRegistry() as registry:
        api = registry.get()
        results = await api.search_multi("Matrix")
"""

from moviestream.providers.base import MediaProviderAdapter
from moviestream.providers.fallback import FallbackPolicyEngine
from moviestream.providers.identifiers import IdentifierBridge
from moviestream.providers.omdb import OMDbAdapter
from moviestream.providers.registry import (
    ADAPTER_FACTORIES,
    ProviderName,
    ProviderRegistry,
    create_media_api,
    resolve_provider,
)
from moviestream.providers.retry import RetryableFetchClient, calculate_backoff_delay
from moviestream.providers.synthetic import SyntheticAdapter
from moviestream.providers.tmdb import TMDBAdapter

__all__ = [
    # Contract
    "MediaProviderAdapter",
    # Building blocks
    "FallbackPolicyEngine",
    "IdentifierBridge",
    "RetryableFetchClient",
    "calculate_backoff_delay",
    # Adapters
    "OMDbAdapter",
    "SyntheticAdapter",
    "TMDBAdapter",
    # Selection
    "ADAPTER_FACTORIES",
    "ProviderName",
    "ProviderRegistry",
    "create_media_api",
    "resolve_provider",
]
