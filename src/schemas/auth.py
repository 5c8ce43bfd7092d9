"""Authentication Pydantic schemas.

Request/response schemas for the pod-federated login, signup and logout
endpoints.
"""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from src.schemas.common import CamelModel


class UserResponse(CamelModel):
    """Public representation of a user.

    Attributes:
        id: User identifier.
        name: Display name.
        web_id: Web ID issued by the pod provider.
        provider_endpoint: Pod provider the user signed in with.
        created_at: When the user was provisioned.
        updated_at: When the user was last modified.
    """

    id: UUID = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    web_id: str = Field(..., description="Web ID issued by the pod provider")
    provider_endpoint: str = Field(..., description="Pod provider base URL")
    created_at: datetime = Field(..., description="Provisioning timestamp")
    updated_at: datetime = Field(..., description="Last modification timestamp")


class _ProviderCredentials(CamelModel):
    """Fields shared by login and signup requests."""

    username: str = Field(
        ..., description="Account name on the pod", min_length=1, max_length=255
    )
    password: str = Field(..., description="Account password", min_length=1)
    provider_endpoint: str = Field(
        ..., description="Base URL of the chosen pod provider", min_length=1
    )

    @field_validator("username", "provider_endpoint")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Trim surrounding whitespace.

        Raises:
            ValueError: If nothing but whitespace was sent.
        """
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class LoginRequest(_ProviderCredentials):
    """Request to log in through a pod provider.

    Attributes:
        username: Account name on the pod.
        password: Account password.
        provider_endpoint: Pod provider base URL.
    """

    model_config = {
        "json_schema_extra": {
            "example": {
                "username": "alice",
                "password": "secret",
                "providerEndpoint": "https://mypod.store",
            }
        }
    }


class SignupRequest(_ProviderCredentials):
    """Request to create an account at a pod provider.

    Attributes:
        username: Requested account name.
        password: Account password.
        email: Contact email for the provider account.
        provider_endpoint: Pod provider base URL.
    """

    email: EmailStr = Field(..., description="Contact email address")

    model_config = {
        "json_schema_extra": {
            "example": {
                "username": "alice",
                "password": "secret",
                "email": "alice@example.com",
                "providerEndpoint": "https://mypod.store",
            }
        }
    }


class LoginResponse(CamelModel):
    """Successful login.

    Attributes:
        token: Session token (also set as HttpOnly cookie).
        user: The authenticated user.
    """

    token: str = Field(..., description="Session token")
    user: UserResponse


class SignupResponse(CamelModel):
    """Signup outcome.

    `token` and `user` are omitted when the caller was already logged in.

    Attributes:
        message: Human-readable outcome.
        token: Session token (also set as HttpOnly cookie).
        user: The new user.
    """

    message: str = Field(..., description="Outcome message")
    token: str | None = Field(default=None, description="Session token")
    user: UserResponse | None = None
