"""Authentication service for pod-federated login and signup.

This service orchestrates the authentication workflows:
- Login: resolve pod provider -> provider login -> provision local user -> session JWT
- Signup: resolve pod provider -> provider signup -> provision local user -> session JWT
- User lookup by Web ID

Passwords are forwarded to the pod provider only; nothing credential-related
is stored or logged here.

Note: This service is asynchronous (uses `async def`) because it performs
database I/O and calls pod providers over HTTP.
"""

import structlog
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.core.result import Failure, Success
from src.models.user import User
from src.providers.activitypod import ActivityPodProvider
from src.providers.errors import ProviderResponseError
from src.providers.registry import PodProviderRegistry, UnsupportedProviderError
from src.services.jwt_service import JWTService

logger = structlog.get_logger(__name__)

# Error details returned to API clients
UNSUPPORTED_PROVIDER = "Unsupported pod provider"
LOGIN_PROVIDER_FAILED = "Endpoint didn't respond with a 200 status code"
LOGIN_NO_TOKEN = "Endpoint did not return a token"
SIGNUP_PROVIDER_FAILED = "Error with the provider"
SIGNUP_NO_TOKEN = "Provider did not return a token"
USER_CHECK_FAILED = "Error while checking user"


class AuthService:
    """Service for pod-federated authentication (orchestrator).

    Attributes:
        session: Database session for async operations
        registry: Configured pod providers
        jwt_service: Service for session JWT operations (sync)
    """

    def __init__(
        self,
        session: AsyncSession,
        registry: PodProviderRegistry,
        jwt_service: JWTService | None = None,
    ):
        """Initialize auth service with dependencies.

        Args:
            session: Async database session
            registry: Pod provider registry
            jwt_service: JWT service (defaults to one built from settings)
        """
        self.session = session
        self.registry = registry
        self.jwt_service = jwt_service or JWTService()

    async def login(
        self, username: str, password: str, provider_endpoint: str
    ) -> tuple[str, User]:
        """Authenticate against a pod provider and open a local session.

        Args:
            username: Account name on the pod.
            password: Account password (forwarded to the provider only).
            provider_endpoint: Base URL of the chosen pod provider.

        Returns:
            Tuple of (session token, user).

        Raises:
            HTTPException: 400 if the provider is unknown, rejects the login or
                returns no token; 500 if the user lookup/insert fails.
        """
        provider = self._resolve_provider(provider_endpoint)

        result = await provider.login(username, password)
        match result:
            case Failure(error=error):
                logger.warning(
                    "provider_login_failed",
                    provider_endpoint=provider.base_url,
                    error_code=error.code.value,
                    error=error.message,
                )
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=LOGIN_PROVIDER_FAILED,
                )
            case Success(value=provider_session):
                pass

        if not provider_session.token or not provider_session.web_id:
            logger.warning(
                "provider_login_missing_token", provider_endpoint=provider.base_url
            )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=LOGIN_NO_TOKEN,
            )

        user = await self._get_or_create_user(
            web_id=provider_session.web_id,
            name=username,
            provider_endpoint=provider.base_url,
        )
        token = self.jwt_service.create_session_token(
            user.web_id, provider_token=provider_session.token
        )

        logger.info("user_logged_in", user_id=str(user.id), web_id=user.web_id)
        return token, user

    async def signup(
        self,
        username: str,
        password: str,
        email: str,
        provider_endpoint: str,
    ) -> tuple[str, User]:
        """Create an account at a pod provider and open a local session.

        Args:
            username: Requested account name.
            password: Account password (forwarded to the provider only).
            email: Contact email for the provider account.
            provider_endpoint: Base URL of the chosen pod provider.

        Returns:
            Tuple of (session token, user).

        Raises:
            HTTPException: the provider's status and message when it rejects
                the signup; 400 for other provider failures or a missing token;
                500 if the user lookup/insert fails.
        """
        provider = self._resolve_provider(provider_endpoint)

        result = await provider.signup(username, password, email)
        match result:
            case Failure(error=ProviderResponseError() as error):
                logger.warning(
                    "provider_signup_rejected",
                    provider_endpoint=provider.base_url,
                    status_code=error.status_code,
                    provider_code=error.provider_code,
                    error=error.message,
                )
                raise HTTPException(
                    status_code=_rejection_status(error),
                    detail=error.message,
                )
            case Failure(error=error):
                logger.warning(
                    "provider_signup_failed",
                    provider_endpoint=provider.base_url,
                    error_code=error.code.value,
                    error=error.message,
                )
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=SIGNUP_PROVIDER_FAILED,
                )
            case Success(value=provider_session):
                pass

        if not provider_session.token or not provider_session.web_id:
            logger.warning(
                "provider_signup_missing_token", provider_endpoint=provider.base_url
            )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=SIGNUP_NO_TOKEN,
            )

        user = await self._get_or_create_user(
            web_id=provider_session.web_id,
            name=username,
            provider_endpoint=provider.base_url,
        )
        token = self.jwt_service.create_session_token(
            user.web_id, provider_token=provider_session.token
        )

        logger.info(
            "user_signed_up",
            user_id=str(user.id),
            web_id=user.web_id,
            new_provider_account=provider_session.new_user,
        )
        return token, user

    async def get_user_by_web_id(self, web_id: str) -> User | None:
        """Get user by Web ID.

        Args:
            web_id: Web ID issued by the pod provider

        Returns:
            User if found, None otherwise
        """
        result = await self.session.execute(select(User).where(User.web_id == web_id))
        return result.scalar_one_or_none()

    def _resolve_provider(self, provider_endpoint: str) -> ActivityPodProvider:
        try:
            return self.registry.get_provider(provider_endpoint)
        except UnsupportedProviderError:
            logger.warning("unsupported_provider", provider_endpoint=provider_endpoint)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=UNSUPPORTED_PROVIDER,
            )

    async def _get_or_create_user(
        self, web_id: str, name: str, provider_endpoint: str
    ) -> User:
        """Return the user for a Web ID, inserting it on first sight.

        Two first logins for the same Web ID can race on the unique constraint;
        the loser rolls back and reads the winner's row.

        Raises:
            HTTPException: 500 on any database failure.
        """
        try:
            user = await self.get_user_by_web_id(web_id)
            if user is not None:
                return user

            user = User(name=name, web_id=web_id, provider_endpoint=provider_endpoint)
            self.session.add(user)
            try:
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()
                existing = await self.get_user_by_web_id(web_id)
                if existing is None:
                    raise
                logger.info("user_provision_race_resolved", web_id=web_id)
                return existing

            logger.info("user_provisioned", user_id=str(user.id), web_id=web_id)
            return user

        except SQLAlchemyError as e:
            logger.error("user_check_failed", web_id=web_id, error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=USER_CHECK_FAILED,
            )


def _rejection_status(error: ProviderResponseError) -> int:
    """HTTP status to relay for a provider rejection.

    Prefers a numeric provider error code, then the provider's HTTP status;
    anything outside 4xx/5xx becomes 400.
    """
    candidates: list[int] = []
    if error.provider_code and error.provider_code.isdigit():
        candidates.append(int(error.provider_code))
    candidates.append(error.status_code)
    for candidate in candidates:
        if 400 <= candidate <= 599:
            return candidate
    return status.HTTP_400_BAD_REQUEST
