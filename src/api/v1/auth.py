"""Pod-federated authentication API endpoints.

Endpoints:
    POST /login   - Log in through a pod provider (sets the auth cookie)
    GET  /logout  - Remove the auth cookie
    POST /signup  - Create a pod account and log in (sets the auth cookie)

A session token is accepted from the `auth` header or the `auth` cookie.
"""

import structlog
from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import get_auth_service, get_jwt_service, get_session_token
from src.core.config import get_settings
from src.schemas.auth import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
    UserResponse,
)
from src.schemas.common import MessageResponse
from src.services.auth_service import AuthService
from src.services.jwt_service import JWTService

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["authentication"])

ALREADY_LOGGED_IN = "You're already logged in"
LOGGED_OUT = "You have been logged out"
SIGNED_UP = "Successfully signed up"


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token as an HttpOnly cookie.

    Args:
        response: Outgoing response.
        token: Session JWT.
    """
    settings = get_settings()
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.auth_cookie_duration,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="lax",
        path="/",
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        204: {"description": "Already logged in"},
        400: {"description": "Provider rejected the login or returned no token"},
        500: {"description": "User lookup failed"},
    },
    summary="Log in",
)
async def login(
    request: LoginRequest,
    response: Response,
    token: str | None = Depends(get_session_token),
    jwt_service: JWTService = Depends(get_jwt_service),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Log in with a pod provider.

    Exchanges the credentials at the chosen provider, provisions the local
    user on first login and returns a session token.

    Args:
        request: Username, password and provider endpoint.
        response: Response used to set the session cookie.
        token: Existing session token, if any.
        jwt_service: JWT service dependency.
        auth_service: Authentication service dependency.

    Returns:
        Session token and user; empty 204 when already logged in.

    Raises:
        HTTPException: 400 on provider failure, 500 on database failure.
    """
    if jwt_service.verify_session_token(token) is not None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    session_token, user = await auth_service.login(
        username=request.username,
        password=request.password,
        provider_endpoint=request.provider_endpoint,
    )
    set_session_cookie(response, session_token)

    return LoginResponse(token=session_token, user=UserResponse.model_validate(user))


@router.get("/logout", response_model=MessageResponse, summary="Log out")
async def logout(response: Response):
    """Remove the session cookie.

    Session tokens are stateless; a client holding a copy in its own storage
    must discard it as well.

    Returns:
        Confirmation message.
    """
    settings = get_settings()
    response.delete_cookie(
        key=settings.auth_cookie_name,
        path="/",
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="lax",
    )
    logger.info("user_logged_out")
    return MessageResponse(message=LOGGED_OUT)


@router.post(
    "/signup",
    response_model=SignupResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Provider failure or no token"},
        500: {"description": "User lookup failed"},
    },
    summary="Sign up",
)
async def signup(
    request: SignupRequest,
    response: Response,
    token: str | None = Depends(get_session_token),
    jwt_service: JWTService = Depends(get_jwt_service),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Create an account at a pod provider and log in.

    Args:
        request: Username, password, email and provider endpoint.
        response: Response used to set the session cookie.
        token: Existing session token, if any.
        jwt_service: JWT service dependency.
        auth_service: Authentication service dependency.

    Returns:
        Outcome message with session token and user.

    Raises:
        HTTPException: provider status on rejection, 400 on other provider
            failures, 500 on database failure.
    """
    if jwt_service.verify_session_token(token) is not None:
        return SignupResponse(message=ALREADY_LOGGED_IN)

    session_token, user = await auth_service.signup(
        username=request.username,
        password=request.password,
        email=str(request.email),
        provider_endpoint=request.provider_endpoint,
    )
    set_session_cookie(response, session_token)

    return SignupResponse(
        message=SIGNED_UP,
        token=session_token,
        user=UserResponse.model_validate(user),
    )
