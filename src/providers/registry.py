"""Registry of viable pod providers.

The set of pod servers users may authenticate against is configuration
(POD_PROVIDERS). The registry is the single place that turns a
client-supplied endpoint into a provider client, so unknown endpoints are
never contacted.
"""

from src.core.config import get_settings
from src.core.constants import PROVIDER_TIMEOUT_DEFAULT
from src.providers.activitypod import ActivityPodProvider


class UnsupportedProviderError(ValueError):
    """Raised when an endpoint is not in the configured provider list."""

    def __init__(self, endpoint: str) -> None:
        super().__init__(f"Unsupported pod provider: {endpoint}")
        self.endpoint = endpoint


def normalize_endpoint(endpoint: str) -> str:
    """Canonical form of a provider endpoint (trimmed, no trailing slash)."""
    return endpoint.strip().rstrip("/")


class PodProviderRegistry:
    """Maps configured provider endpoints to ActivityPod clients.

    Attributes:
        _endpoints: Normalized endpoints in configuration order.
        _timeout: Timeout handed to every provider client.
    """

    def __init__(
        self,
        endpoints: list[str],
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
    ) -> None:
        self._endpoints = [normalize_endpoint(e) for e in endpoints]
        self._timeout = timeout

    def list_providers(self) -> list[str]:
        """Return the configured provider endpoints."""
        return list(self._endpoints)

    def is_supported(self, endpoint: str) -> bool:
        """Check whether an endpoint is a configured provider."""
        return normalize_endpoint(endpoint) in self._endpoints

    def get_provider(self, endpoint: str) -> ActivityPodProvider:
        """Get a client for a configured provider.

        Args:
            endpoint: Provider base URL as sent by the client.

        Returns:
            ActivityPodProvider for the endpoint.

        Raises:
            UnsupportedProviderError: If the endpoint is not configured.
        """
        if not self.is_supported(endpoint):
            raise UnsupportedProviderError(endpoint)
        return ActivityPodProvider(
            base_url=normalize_endpoint(endpoint), timeout=self._timeout
        )


def get_provider_registry() -> PodProviderRegistry:
    """Build the registry from current settings (FastAPI dependency)."""
    settings = get_settings()
    return PodProviderRegistry(settings.pod_providers, timeout=settings.provider_timeout)
