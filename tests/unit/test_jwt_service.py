"""Unit tests for JWTService (session tokens).

Tests cover:
- Session token claims (sub, webId, token, type, iat, exp)
- Expiry after the configured session duration
- Rejection of tampered, foreign and non-session tokens
- Non-raising verification
"""

from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time
from jose import jwt

from src.services.jwt_service import JWTError, JWTService

WEB_ID = "https://mypod.store/alice"


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(secret_key="unit-test-secret", session_duration_seconds=3600)


@pytest.mark.unit
class TestCreateSessionToken:
    """Test session token creation."""

    def test_token_carries_web_id_and_type(self, jwt_service):
        """Token claims identify the user and mark the token as a session."""
        token = jwt_service.create_session_token(WEB_ID)

        claims = jwt_service.decode_token(token)

        assert claims["sub"] == WEB_ID
        assert claims["webId"] == WEB_ID
        assert claims["type"] == "session"
        assert "token" not in claims

    def test_token_includes_provider_token_when_given(self, jwt_service):
        """Provider token is embedded for later calls to the pod."""
        token = jwt_service.create_session_token(WEB_ID, provider_token="pod-token")

        assert jwt_service.decode_token(token)["token"] == "pod-token"

    @freeze_time("2026-01-01 12:00:00")
    def test_expiry_matches_session_duration(self, jwt_service):
        """exp is iat plus the session duration."""
        token = jwt_service.create_session_token(WEB_ID)

        claims = jwt_service.decode_token(token)

        assert claims["exp"] - claims["iat"] == 3600
        assert claims["iat"] == int(datetime(2026, 1, 1, 12, tzinfo=UTC).timestamp())

    def test_defaults_come_from_settings(self):
        """Unset parameters fall back to settings."""
        from src.core.config import get_settings

        service = JWTService()
        settings = get_settings()

        assert service.secret_key == settings.secret_key
        assert service.algorithm == settings.algorithm
        assert service.session_duration_seconds == settings.auth_cookie_duration


@pytest.mark.unit
class TestDecodeToken:
    """Test token validation."""

    def test_expired_token_rejected(self, jwt_service):
        """A token past its session duration fails validation."""
        with freeze_time("2026-01-01 12:00:00"):
            token = jwt_service.create_session_token(WEB_ID)

        with freeze_time("2026-01-01 13:00:01"):
            with pytest.raises(JWTError):
                jwt_service.decode_token(token)

    def test_token_still_valid_before_expiry(self, jwt_service):
        """A token is accepted until its expiry."""
        with freeze_time("2026-01-01 12:00:00"):
            token = jwt_service.create_session_token(WEB_ID)

        with freeze_time("2026-01-01 12:59:00"):
            assert jwt_service.decode_token(token)["webId"] == WEB_ID

    def test_token_signed_with_other_key_rejected(self, jwt_service):
        """Tokens from another issuer are refused."""
        other = JWTService(secret_key="someone-else", session_duration_seconds=3600)
        token = other.create_session_token(WEB_ID)

        with pytest.raises(JWTError):
            jwt_service.decode_token(token)

    def test_garbage_rejected(self, jwt_service):
        """Malformed strings are refused."""
        with pytest.raises(JWTError):
            jwt_service.decode_token("not-a-jwt")

    def test_non_session_token_rejected(self, jwt_service):
        """A correctly signed token of another type is refused."""
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "sub": WEB_ID,
                "webId": WEB_ID,
                "type": "access",
                "iat": now,
                "exp": now + timedelta(minutes=5),
            },
            "unit-test-secret",
            algorithm="HS256",
        )

        with pytest.raises(JWTError, match="Invalid token type"):
            jwt_service.decode_token(token)

    def test_token_without_web_id_rejected(self, jwt_service):
        """A session token must name a Web ID."""
        now = datetime.now(UTC)
        token = jwt.encode(
            {"type": "session", "iat": now, "exp": now + timedelta(minutes=5)},
            "unit-test-secret",
            algorithm="HS256",
        )

        with pytest.raises(JWTError, match="webId"):
            jwt_service.decode_token(token)


@pytest.mark.unit
class TestVerifySessionToken:
    """Test the non-raising verification used for "already logged in" checks."""

    def test_returns_claims_for_valid_token(self, jwt_service):
        token = jwt_service.create_session_token(WEB_ID)

        claims = jwt_service.verify_session_token(token)

        assert claims is not None
        assert claims["webId"] == WEB_ID

    @pytest.mark.parametrize("token", [None, "", "garbage"])
    def test_returns_none_for_missing_or_invalid(self, jwt_service, token):
        assert jwt_service.verify_session_token(token) is None

    def test_get_web_id_from_token(self, jwt_service):
        token = jwt_service.create_session_token(WEB_ID)

        assert jwt_service.get_web_id_from_token(token) == WEB_ID
