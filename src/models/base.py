"""Base model classes for all database models.

The base models use SQLModel which combines SQLAlchemy and Pydantic, providing
both database ORM functionality and data validation.

Example:
    >>> from src.models.base import PodPostBase
    >>>
    >>> class Post(PodPostBase, table=True):
    >>>     __tablename__ = "posts"
    >>>
    >>>     content: str
"""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class PodPostBase(SQLModel, table=False):
    """Base model for all PodPost database models.

    Provides a UUID primary key and a creation timestamp.

    Attributes:
        id: UUID primary key, automatically generated.
        created_at: Timestamp when the record was created.

    Note:
        Always inherit with table=True and set __tablename__:
        >>> class MyModel(PodPostBase, table=True):
        >>>     __tablename__ = "my_table"
    """

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        index=True,
        description="Unique identifier for the record",
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
        description="Timestamp when the record was created",
    )

    model_config = ConfigDict(
        from_attributes=True,  # Allow reading from ORM objects (SQLAlchemy)
        validate_assignment=True,  # Validate field assignments
    )


class TimestampedBase(PodPostBase, table=False):
    """Base model for records that are modified after creation.

    Attributes:
        updated_at: When the record was last modified.
    """

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
        description="When the record was last modified",
    )
