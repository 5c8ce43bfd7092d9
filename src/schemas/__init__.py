"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from database models (HTTP-layer concerns only).

Usage:
    from src.schemas import LoginRequest, PostResponse
"""

from src.schemas.auth import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
    UserResponse,
)
from src.schemas.common import (
    CamelModel,
    HealthResponse,
    MessageResponse,
    ProviderListResponse,
)
from src.schemas.post import PostAuthor, PostCreateRequest, PostResponse

__all__ = [
    "CamelModel",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PostAuthor",
    "PostCreateRequest",
    "PostResponse",
    "ProviderListResponse",
    "SignupRequest",
    "SignupResponse",
    "UserResponse",
]
