"""JWT service for session token generation and validation.

This service handles all JWT operations:
- Creating session tokens bound to a pod Web ID
- Decoding and validating tokens
- Non-raising verification for "already logged in" checks

Note: This service is synchronous (uses `def` instead of `async def`)
because JWT operations are pure CPU-bound work with no I/O.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from src.core.config import get_settings
from src.core.constants import SESSION_TOKEN_TYPE

__all__ = ["JWTError", "JWTService"]


class JWTService:
    """Service for session JWT operations.

    Token Claims:
        - sub (subject): Web ID of the user
        - webId: Web ID of the user (same as sub, kept for clients)
        - token: Provider token, when the provider issued one
        - type: Always "session"
        - exp (expiration): Token expiration timestamp
        - iat (issued at): Token creation timestamp

    Attributes:
        secret_key: Secret key for signing tokens
        algorithm: Signing algorithm (HS256)
        session_duration_seconds: Session token TTL (AUTH_COOKIE_DURATION)
    """

    def __init__(
        self,
        secret_key: str | None = None,
        algorithm: str | None = None,
        session_duration_seconds: int | None = None,
    ):
        """Initialize JWT service, falling back to settings for unset values."""
        settings = get_settings()
        self.secret_key = secret_key or settings.secret_key
        self.algorithm = algorithm or settings.algorithm
        self.session_duration_seconds = (
            session_duration_seconds or settings.auth_cookie_duration
        )

    def create_session_token(
        self,
        web_id: str,
        provider_token: str | None = None,
    ) -> str:
        """Create a session token for a pod-authenticated user.

        Args:
            web_id: The user's Web ID.
            provider_token: Token issued by the pod provider, if any.

        Returns:
            Encoded JWT session token string

        Example:
            >>> service = JWTService()
            >>> token = service.create_session_token("https://mypod.store/alice")
            >>> service.decode_token(token)["webId"]
            'https://mypod.store/alice'
        """
        now = datetime.now(UTC)
        expire = now + timedelta(seconds=self.session_duration_seconds)

        claims: dict[str, Any] = {
            "sub": web_id,
            "webId": web_id,
            "type": SESSION_TOKEN_TYPE,
            "exp": expire,
            "iat": now,
        }
        if provider_token:
            claims["token"] = provider_token

        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and validate a JWT token.

        Verifies the signature, expiry and that it is a session token.

        Args:
            token: Encoded JWT token string

        Returns:
            Dictionary of token claims

        Raises:
            JWTError: If token is invalid, expired, of the wrong type or
                carries no Web ID.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise JWTError(f"Token validation failed: {str(e)}")

        token_type = payload.get("type")
        if token_type != SESSION_TOKEN_TYPE:
            raise JWTError(
                f"Invalid token type: expected {SESSION_TOKEN_TYPE}, got {token_type}"
            )
        if not payload.get("webId"):
            raise JWTError("Token missing webId claim")

        return payload

    def verify_session_token(self, token: str | None) -> dict[str, Any] | None:
        """Return the claims of a valid session token, or None.

        Args:
            token: Encoded JWT token string (None and "" are accepted).

        Returns:
            Claims dictionary, or None when the token is missing or invalid.
        """
        if not token:
            return None
        try:
            return self.decode_token(token)
        except JWTError:
            return None

    def get_web_id_from_token(self, token: str) -> str:
        """Extract the Web ID from a valid token.

        Raises:
            JWTError: If token is invalid.
        """
        return str(self.decode_token(token)["webId"])
