"""Post model: a short text published by a user."""

from uuid import UUID

from sqlalchemy import Column, ForeignKey, String, Uuid
from sqlmodel import Field

from src.core.constants import POST_CONTENT_MAX_LENGTH
from src.models.base import PodPostBase


class Post(PodPostBase, table=True):
    """Short post authored by a user.

    Attributes:
        author_id: Owning user.
        content: Post text (1..1000 characters).
    """

    __tablename__ = "posts"

    author_id: UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("users.id", ondelete="CASCADE"),
            index=True,
            nullable=False,
        ),
        description="Author user id",
    )
    content: str = Field(
        sa_column=Column(String(POST_CONTENT_MAX_LENGTH), nullable=False),
        description="Post text",
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, author_id={self.author_id})>"
