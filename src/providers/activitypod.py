"""ActivityPod pod provider client.

ActivityPod exposes username/password authentication on every pod server:

    POST {base_url}/auth/login   {"username", "password"}
    POST {base_url}/auth/signup  {"username", "email", "password"}

Both answer `{"token": ..., "webId": ..., "newUser": ...}` on success and a
`{"code": ..., "message": ...}` body on failure.
"""

from dataclasses import dataclass
from typing import Any

from src.core.result import Failure, Result, Success
from src.providers.base import BaseProviderAPIClient
from src.providers.errors import PodProviderError


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderSession:
    """Identity confirmed by a pod provider.

    Attributes:
        token: Provider-issued token (None when the provider omitted it).
        web_id: The user's Web ID (None when the provider omitted it).
        new_user: Whether the provider just created the account.
    """

    token: str | None
    web_id: str | None
    new_user: bool = False


class ActivityPodProvider(BaseProviderAPIClient):
    """Client for one ActivityPod server."""

    async def login(
        self, username: str, password: str
    ) -> Result[ProviderSession, PodProviderError]:
        """Exchange username/password for a provider token.

        Args:
            username: Account name on the pod.
            password: Account password (never logged).

        Returns:
            Success(ProviderSession) or Failure(PodProviderError).
        """
        result = await self._execute_and_parse_object(
            method="POST",
            path="/auth/login",
            json_data={"username": username, "password": password},
            operation="login",
        )
        return self._to_session(result)

    async def signup(
        self, username: str, password: str, email: str
    ) -> Result[ProviderSession, PodProviderError]:
        """Create an account on the pod.

        Args:
            username: Requested account name.
            password: Account password (never logged).
            email: Contact email for the account.

        Returns:
            Success(ProviderSession) or Failure(PodProviderError).
        """
        result = await self._execute_and_parse_object(
            method="POST",
            path="/auth/signup",
            json_data={"username": username, "email": email, "password": password},
            operation="signup",
        )
        return self._to_session(result)

    @staticmethod
    def _to_session(
        result: Result[dict[str, Any], PodProviderError],
    ) -> Result[ProviderSession, PodProviderError]:
        match result:
            case Failure():
                return result
            case Success(value=data):
                token = data.get("token")
                web_id = data.get("webId")
                return Success(
                    value=ProviderSession(
                        token=str(token) if token else None,
                        web_id=str(web_id) if web_id else None,
                        new_user=bool(data.get("newUser", False)),
                    )
                )
