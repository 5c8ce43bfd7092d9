"""FastAPI dependencies for authentication and database access.

This module provides reusable dependencies for:
- Database session management
- Session token extraction (auth header or auth cookie) and validation
- Current user authentication
- Service construction
"""

import structlog
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import get_settings
from src.core.constants import BEARER_PREFIX
from src.core.database import get_session
from src.models.user import User
from src.providers.registry import PodProviderRegistry, get_provider_registry
from src.services.auth_service import AuthService
from src.services.jwt_service import JWTError, JWTService
from src.services.post_service import PostService

logger = structlog.get_logger(__name__)


def get_jwt_service() -> JWTService:
    """Get JWT service instance."""
    return JWTService()


def get_session_token(request: Request) -> str | None:
    """Extract the session token from the auth header, falling back to the cookie.

    A leading "Bearer " is tolerated on the header value.

    Args:
        request: Incoming request.

    Returns:
        Raw token string, or None if the request carries none.
    """
    settings = get_settings()
    token = request.headers.get(settings.auth_header_name)
    if token and token.startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX) :]
    if not token:
        token = request.cookies.get(settings.auth_cookie_name)
    return token or None


def get_auth_service(
    session: AsyncSession = Depends(get_session),
    registry: PodProviderRegistry = Depends(get_provider_registry),
    jwt_service: JWTService = Depends(get_jwt_service),
) -> AuthService:
    """Get authentication service instance.

    Args:
        session: Database session.
        registry: Configured pod providers.
        jwt_service: JWT service.

    Returns:
        AuthService instance.
    """
    return AuthService(session, registry, jwt_service)


def get_post_service(session: AsyncSession = Depends(get_session)) -> PostService:
    """Get post service instance."""
    return PostService(session)


async def get_current_user(
    token: str | None = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Get the currently authenticated user from the session token.

    Use on every protected endpoint.

    Args:
        token: Session token from the auth header or cookie.
        auth_service: Service used for the user lookup.

    Returns:
        Authenticated User model.

    Raises:
        HTTPException: 401 if token missing, invalid, expired, or user not found.

    Example:
        @router.get("/protected")
        async def protected_endpoint(
            current_user: User = Depends(get_current_user)
        ):
            return {"user_id": current_user.id}
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        web_id = auth_service.jwt_service.get_web_id_from_token(token)
    except JWTError as e:
        logger.warning("session_token_rejected", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await auth_service.get_user_by_web_id(web_id)
    if user is None:
        logger.warning("session_user_not_found", web_id=web_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user
