"""Integration tests for AuthService against a real (SQLite) database.

Pod providers are faked through the registry from conftest.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.models.user import User
from src.providers.activitypod import ProviderSession
from src.providers.errors import ProviderResponseError, ProviderUnavailableError
from src.services.auth_service import (
    LOGIN_NO_TOKEN,
    LOGIN_PROVIDER_FAILED,
    SIGNUP_NO_TOKEN,
    SIGNUP_PROVIDER_FAILED,
    UNSUPPORTED_PROVIDER,
    USER_CHECK_FAILED,
    AuthService,
)
from src.services.jwt_service import JWTService

PROVIDER_ENDPOINT = "https://mypod.store"
WEB_ID = f"{PROVIDER_ENDPOINT}/alice"


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(secret_key="auth-service-test-key")


@pytest.fixture
def auth_service(db_session, fake_registry, jwt_service) -> AuthService:
    return AuthService(db_session, fake_registry, jwt_service)


def rejected(status_code: int, message: str, provider_code: str | None = None):
    return Failure(
        error=ProviderResponseError(
            code=ErrorCode.PROVIDER_REQUEST_REJECTED,
            message=message,
            provider_endpoint=PROVIDER_ENDPOINT,
            status_code=status_code,
            provider_code=provider_code,
        )
    )


def unavailable():
    return Failure(
        error=ProviderUnavailableError(
            code=ErrorCode.PROVIDER_UNAVAILABLE,
            message="Pod provider request timed out",
            provider_endpoint=PROVIDER_ENDPOINT,
        )
    )


@pytest.mark.integration
class TestLogin:
    """Test AuthService.login."""

    async def test_login_provisions_user(self, auth_service, db_session, jwt_service):
        token, user = await auth_service.login("alice", "pw", PROVIDER_ENDPOINT)

        assert user.web_id == WEB_ID
        assert user.name == "alice"
        assert user.provider_endpoint == PROVIDER_ENDPOINT

        claims = jwt_service.decode_token(token)
        assert claims["webId"] == WEB_ID
        assert claims["token"] == "provider-token"

        rows = (await db_session.execute(select(User))).scalars().all()
        assert len(rows) == 1

    async def test_repeated_login_reuses_user(self, auth_service, db_session):
        """Logging in twice never creates a second row for the same Web ID."""
        _, first = await auth_service.login("alice", "pw", PROVIDER_ENDPOINT)
        _, second = await auth_service.login("alice", "pw", PROVIDER_ENDPOINT)

        assert first.id == second.id
        rows = (await db_session.execute(select(User))).scalars().all()
        assert len(rows) == 1

    async def test_endpoint_trailing_slash_accepted(self, auth_service, fake_registry):
        await auth_service.login("alice", "pw", f"{PROVIDER_ENDPOINT}/")

        assert fake_registry.providers[PROVIDER_ENDPOINT].calls == [("login", "alice")]

    async def test_unsupported_provider(self, auth_service):
        with pytest.raises(HTTPException) as exc_info:
            await auth_service.login("alice", "pw", "https://evil.example")

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == UNSUPPORTED_PROVIDER

    @pytest.mark.parametrize(
        "failure",
        [rejected(401, "Invalid credentials"), unavailable()],
        ids=["rejected", "unavailable"],
    )
    async def test_provider_failure(self, auth_service, fake_registry, failure):
        fake_registry.providers[PROVIDER_ENDPOINT].login_result = failure

        with pytest.raises(HTTPException) as exc_info:
            await auth_service.login("alice", "pw", PROVIDER_ENDPOINT)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == LOGIN_PROVIDER_FAILED

    async def test_provider_without_token(self, auth_service, fake_registry, db_session):
        fake_registry.providers[PROVIDER_ENDPOINT].login_result = Success(
            value=ProviderSession(token=None, web_id=WEB_ID)
        )

        with pytest.raises(HTTPException) as exc_info:
            await auth_service.login("alice", "pw", PROVIDER_ENDPOINT)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == LOGIN_NO_TOKEN
        rows = (await db_session.execute(select(User))).scalars().all()
        assert rows == []


@pytest.mark.integration
class TestSignup:
    """Test AuthService.signup."""

    async def test_signup_provisions_user(self, auth_service, fake_registry):
        token, user = await auth_service.signup(
            "alice", "pw", "alice@example.com", PROVIDER_ENDPOINT
        )

        assert token
        assert user.web_id == WEB_ID
        assert fake_registry.providers[PROVIDER_ENDPOINT].calls == [("signup", "alice")]

    async def test_signup_rejection_relays_provider_status(
        self, auth_service, fake_registry
    ):
        fake_registry.providers[PROVIDER_ENDPOINT].signup_result = rejected(
            409, "username.already.exists"
        )

        with pytest.raises(HTTPException) as exc_info:
            await auth_service.signup("alice", "pw", "a@example.com", PROVIDER_ENDPOINT)

        assert exc_info.value.status_code == 409
        assert exc_info.value.detail == "username.already.exists"

    async def test_signup_rejection_prefers_numeric_provider_code(
        self, auth_service, fake_registry
    ):
        fake_registry.providers[PROVIDER_ENDPOINT].signup_result = rejected(
            500, "email.already.exists", provider_code="400"
        )

        with pytest.raises(HTTPException) as exc_info:
            await auth_service.signup("alice", "pw", "a@example.com", PROVIDER_ENDPOINT)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "email.already.exists"

    async def test_signup_provider_unreachable(self, auth_service, fake_registry):
        fake_registry.providers[PROVIDER_ENDPOINT].signup_result = unavailable()

        with pytest.raises(HTTPException) as exc_info:
            await auth_service.signup("alice", "pw", "a@example.com", PROVIDER_ENDPOINT)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == SIGNUP_PROVIDER_FAILED

    async def test_signup_without_token(self, auth_service, fake_registry):
        fake_registry.providers[PROVIDER_ENDPOINT].signup_result = Success(
            value=ProviderSession(token="t", web_id=None, new_user=True)
        )

        with pytest.raises(HTTPException) as exc_info:
            await auth_service.signup("alice", "pw", "a@example.com", PROVIDER_ENDPOINT)

        assert exc_info.value.detail == SIGNUP_NO_TOKEN


@pytest.mark.integration
class TestUserProvisioning:
    """Test local user lookup/insert."""

    async def test_get_user_by_web_id(self, auth_service):
        assert await auth_service.get_user_by_web_id(WEB_ID) is None

        _, user = await auth_service.login("alice", "pw", PROVIDER_ENDPOINT)

        found = await auth_service.get_user_by_web_id(WEB_ID)
        assert found is not None
        assert found.id == user.id

    async def test_concurrent_insert_resolved(
        self, db_session, fake_registry, jwt_service
    ):
        """A unique-constraint conflict falls back to the row that won the race."""
        winner = User(name="alice", web_id=WEB_ID, provider_endpoint=PROVIDER_ENDPOINT)
        db_session.add(winner)
        await db_session.commit()
        winner_id = winner.id

        class LateLookupAuthService(AuthService):
            lookups = 0

            async def get_user_by_web_id(self, web_id):
                self.lookups += 1
                if self.lookups == 1:
                    return None
                return await super().get_user_by_web_id(web_id)

        service = LateLookupAuthService(db_session, fake_registry, jwt_service)

        _, user = await service.login("alice", "pw", PROVIDER_ENDPOINT)

        assert user.id == winner_id
        assert service.lookups == 2

    async def test_database_error_returns_500(self, fake_registry, jwt_service):
        session = MagicMock()
        session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("database is down"))
        )
        service = AuthService(session, fake_registry, jwt_service)

        with pytest.raises(HTTPException) as exc_info:
            await service.login("alice", "pw", PROVIDER_ENDPOINT)

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == USER_CHECK_FAILED

    async def test_signup_database_error_returns_500(self, fake_registry, jwt_service):
        session = MagicMock()
        session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("database is down"))
        )
        service = AuthService(session, fake_registry, jwt_service)

        with pytest.raises(HTTPException) as exc_info:
            await service.signup("alice", "pw", "a@example.com", PROVIDER_ENDPOINT)

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == USER_CHECK_FAILED
