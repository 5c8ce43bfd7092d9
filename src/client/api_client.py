"""HTTP client for the PodPost API.

Wraps every endpoint the frontend uses and turns non-2xx answers into
displayable messages instead of raising, so callers branch on
`ApiResponse.status`.

Usage:
    client = ApiClient("http://localhost:8000", token_getter=lambda: token)
    result = client.fetch_posts({"limit": 10})
    if result.ok:
        for post in result.data:
            print(post["content"])
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx
import structlog

from src.client.config import ClientSettings
from src.client.errors import (
    GENERAL_DEFAULT,
    PROVIDER_SIGN_IN_ERRORS,
    PROVIDER_SIGN_UP_ERRORS,
    SIGN_UP_DEFAULT,
    UNAUTHORIZED,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")

AUTH_HEADER = "auth"


@dataclass(frozen=True, slots=True)
class ApiResponse(Generic[T]):
    """Outcome of an API call.

    Attributes:
        data: Parsed JSON body on success, a display message on failure.
        status: HTTP status (after error mapping).
    """

    data: T
    status: int

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def _error_message(response: httpx.Response) -> str:
    """Extract the server's error message (`detail` field or raw text)."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return response.text


class ApiClient:
    """Synchronous client for the PodPost HTTP API.

    Args:
        base_url: API base URL.
        token_getter: Returns the current session token (sent in the `auth` header).
        on_unauthorized: Called when the API answers 401.
        timeout: HTTP timeout in seconds.
        transport: Optional httpx transport (tests, proxies).
    """

    def __init__(
        self,
        base_url: str,
        token_getter: Callable[[], str | None] | None = None,
        on_unauthorized: Callable[[], None] | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token_getter = token_getter
        self.on_unauthorized = on_unauthorized
        self._http = httpx.Client(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    @classmethod
    def from_settings(
        cls, settings: ClientSettings | None = None, **kwargs: Any
    ) -> ApiClient:
        """Build a client from ClientSettings (environment)."""
        settings = settings or ClientSettings()
        return cls(settings.api_url, timeout=settings.timeout, **kwargs)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def clear_cookies(self) -> None:
        """Forget cookies set by the API (the session cookie)."""
        self._http.cookies.clear()

    def get_auth(self) -> str:
        """Current session token, or an empty string."""
        if self.token_getter is None:
            return ""
        return self.token_getter() or ""

    def handle_error(self, exc: Exception) -> ApiResponse[str]:
        """Map a failed request to a displayable message.

        - 500: known signup error, else the signup default (reported as 400)
        - 401: triggers on_unauthorized, returns "unauthorized"
        - 400: known sign-in or signup error
        - other statuses: general default with the original status
        - transport errors: general default with 500

        Args:
            exc: Exception raised while performing the request.

        Returns:
            ApiResponse carrying the message and mapped status.
        """
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            message = _error_message(exc.response)

            if status == 500:
                return ApiResponse(
                    data=PROVIDER_SIGN_UP_ERRORS.get(message, SIGN_UP_DEFAULT),
                    status=400,
                )
            if status == 401:
                if self.on_unauthorized is not None:
                    self.on_unauthorized()
                return ApiResponse(data=UNAUTHORIZED, status=401)
            if status == 400:
                known = PROVIDER_SIGN_IN_ERRORS.get(message) or PROVIDER_SIGN_UP_ERRORS.get(
                    message
                )
                if known is not None:
                    return ApiResponse(data=known, status=400)

            logger.warning("api_request_failed", status_code=status, detail=message)
            return ApiResponse(data=GENERAL_DEFAULT, status=status)

        logger.warning(
            "api_request_error", error_type=type(exc).__name__, error=str(exc)
        )
        return ApiResponse(data=GENERAL_DEFAULT, status=500)

    def _request(
        self,
        method: str,
        path: str,
        *,
        authenticated: bool = False,
        **kwargs: Any,
    ) -> ApiResponse[Any]:
        headers = {AUTH_HEADER: self.get_auth()} if authenticated else None
        try:
            response = self._http.request(method, path, headers=headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            return self.handle_error(e)

        data: Any = None
        if response.content:
            try:
                data = response.json()
            except ValueError:
                data = response.text
        return ApiResponse(data=data, status=response.status_code)

    # Auth

    def signup(self, body: Mapping[str, Any]) -> ApiResponse[Any]:
        """Create a pod account and log in.

        Args:
            body: `{username, password, email, providerEndpoint}`.
        """
        return self._request("POST", "/signup", json=dict(body), authenticated=True)

    def signin(self, body: Mapping[str, Any]) -> ApiResponse[Any]:
        """Log in through a pod provider.

        Args:
            body: `{username, password, providerEndpoint}`.
        """
        return self._request("POST", "/login", json=dict(body), authenticated=True)

    def logout(self) -> ApiResponse[Any]:
        """Ask the API to drop the session cookie."""
        return self._request("GET", "/logout")

    def fetch_providers(self) -> ApiResponse[Any]:
        """List pod providers the API accepts."""
        return self._request("GET", "/providers")

    # Posts

    def fetch_posts(self, query: Mapping[str, Any] | None = None) -> ApiResponse[Any]:
        """Fetch posts, newest first.

        Args:
            query: Optional `limit`, `offset` and `author` parameters.
        """
        params = {k: v for k, v in (query or {}).items() if v is not None}
        return self._request("GET", "/posts", params=params, authenticated=True)

    def create_post(self, body: Mapping[str, Any]) -> ApiResponse[Any]:
        """Publish a post.

        Args:
            body: `{content}`.
        """
        return self._request("POST", "/posts", json=dict(body), authenticated=True)
