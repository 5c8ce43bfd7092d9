"""User model for pod-authenticated accounts.

A user row is provisioned the first time a pod provider confirms an
identity. The web id issued by the provider is the user's global identity.
"""

from sqlalchemy import Column, String
from sqlmodel import Field

from src.models.base import TimestampedBase


class User(TimestampedBase, table=True):
    """Application user identified by a pod web id.

    Attributes:
        name: Display name (the username used at the provider).
        web_id: Web ID URL issued by the pod provider (unique).
        provider_endpoint: Base URL of the pod provider the user signed in with.
    """

    __tablename__ = "users"

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Display name (the provider username)",
    )
    web_id: str = Field(
        sa_column=Column(String(2048), unique=True, index=True, nullable=False),
        description="Web ID issued by the pod provider (unique)",
    )
    provider_endpoint: str = Field(
        sa_column=Column(String(2048), nullable=False),
        description="Pod provider base URL",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, web_id={self.web_id!r})>"
