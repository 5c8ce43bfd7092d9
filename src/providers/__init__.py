"""Pod provider integrations.

Usage:
    from src.providers import PodProviderRegistry

    registry = PodProviderRegistry(["https://mypod.store"])
    provider = registry.get_provider("https://mypod.store/")
    result = await provider.login("alice", "secret")
"""

from src.providers.activitypod import ActivityPodProvider, ProviderSession
from src.providers.errors import (
    PodProviderError,
    ProviderInvalidResponseError,
    ProviderResponseError,
    ProviderUnavailableError,
)
from src.providers.registry import (
    PodProviderRegistry,
    UnsupportedProviderError,
    get_provider_registry,
)

__all__ = [
    "ActivityPodProvider",
    "PodProviderError",
    "PodProviderRegistry",
    "ProviderInvalidResponseError",
    "ProviderResponseError",
    "ProviderSession",
    "ProviderUnavailableError",
    "UnsupportedProviderError",
    "get_provider_registry",
]
