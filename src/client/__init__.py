"""Python client for the PodPost API.

Usage:
    from src.client import ApiClient, AuthStore, ClientSettings, LocalStorage
"""

from src.client.api_client import ApiClient, ApiResponse
from src.client.auth_store import AuthStore
from src.client.config import ClientSettings
from src.client.local_storage import LocalStorage

__all__ = [
    "ApiClient",
    "ApiResponse",
    "AuthStore",
    "ClientSettings",
    "LocalStorage",
]
