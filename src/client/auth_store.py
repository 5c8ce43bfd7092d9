"""Authentication state store for PodPost clients.

Holds the session (user, logged-in flag, token) and mirrors every change
into LocalStorage so a later process can restore it with
`authenticate_user()`.

Usage:
    settings = ClientSettings()
    store = AuthStore(ApiClient.from_settings(settings), LocalStorage(settings.storage_path))
    if not store.authenticate_user():
        store.login("alice", "secret", "https://mypod.store")
"""

from __future__ import annotations

from typing import Any

import structlog

from src.client.api_client import ApiClient, ApiResponse
from src.client.local_storage import LocalStorage

logger = structlog.get_logger(__name__)

USER_KEY = "user"
LOGGED_IN_KEY = "isLoggedIn"
TOKEN_KEY = "token"


class AuthStore:
    """Client-side session state.

    The store registers itself with the client: the client reads the token
    from the store and a 401 from the API logs the store out.

    Attributes:
        user: The logged-in user as returned by the API, or None.
        is_logged_in: Whether a session is active.
        token: Session token, "" when logged out.
    """

    def __init__(self, client: ApiClient, storage: LocalStorage) -> None:
        self.client = client
        self.storage = storage
        self.user: dict[str, Any] | None = None
        self.is_logged_in = False
        self.token = ""

        client.token_getter = lambda: self.token
        client.on_unauthorized = self.logout

    def set_user(self, user: dict[str, Any] | None) -> None:
        self.user = user
        if user is None:
            self.storage.remove_item(USER_KEY)
        else:
            self.storage.set_item(USER_KEY, user)

    def set_logged_in(self, value: bool) -> None:
        self.is_logged_in = value
        self.storage.set_item(LOGGED_IN_KEY, value)

    def set_token(self, token: str) -> None:
        self.token = token
        if token:
            self.storage.set_item(TOKEN_KEY, token)
        else:
            self.storage.remove_item(TOKEN_KEY)

    def _apply_session(self, data: Any) -> bool:
        if not isinstance(data, dict) or not data.get("token"):
            return False
        self.set_logged_in(True)
        self.set_token(data["token"])
        self.set_user(data.get("user"))
        logger.info("client_session_started", web_id=(data.get("user") or {}).get("webId"))
        return True

    def login(self, username: str, password: str, endpoint: str) -> ApiResponse[Any]:
        """Log in through a pod provider.

        On success the session is stored; on failure state is left untouched
        and the response carries a displayable message.

        Args:
            username: Account name on the pod.
            password: Account password.
            endpoint: Pod provider base URL.

        Returns:
            The API response.
        """
        response = self.client.signin(
            {"username": username, "password": password, "providerEndpoint": endpoint}
        )
        if response.status == 200:
            self._apply_session(response.data)
        return response

    def signup(
        self, username: str, password: str, email: str, endpoint: str
    ) -> ApiResponse[Any]:
        """Create a pod account and log in.

        Returns:
            The API response.
        """
        response = self.client.signup(
            {
                "username": username,
                "password": password,
                "email": email,
                "providerEndpoint": endpoint,
            }
        )
        if response.status == 200:
            self._apply_session(response.data)
        return response

    def logout(self) -> None:
        """Drop the local session (state, storage and cookies)."""
        self.is_logged_in = False
        self.token = ""
        self.user = None
        for key in (USER_KEY, LOGGED_IN_KEY, TOKEN_KEY):
            self.storage.remove_item(key)
        self.client.clear_cookies()
        logger.info("client_session_cleared")

    def authenticate_user(self) -> bool:
        """Restore the session persisted by a previous run.

        Returns:
            True if a usable session was restored.
        """
        token = self.storage.get_item(TOKEN_KEY) or ""
        logged_in = bool(self.storage.get_item(LOGGED_IN_KEY, False))
        if not (logged_in and token):
            if logged_in or token:
                self.logout()
            return False

        self.token = token
        self.is_logged_in = True
        self.user = self.storage.get_item(USER_KEY)
        return True
