"""Post Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from src.core.constants import POST_CONTENT_MAX_LENGTH
from src.schemas.common import CamelModel


class PostCreateRequest(CamelModel):
    """Request to publish a post.

    Attributes:
        content: Post text, 1..1000 characters after trimming.
    """

    content: str = Field(..., description="Post text")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Trim and bound post text.

        Raises:
            ValueError: If empty after trimming or longer than the limit.
        """
        v = v.strip()
        if not v:
            raise ValueError("Post content must not be empty")
        if len(v) > POST_CONTENT_MAX_LENGTH:
            raise ValueError(
                f"Post content must be at most {POST_CONTENT_MAX_LENGTH} characters"
            )
        return v

    model_config = {"json_schema_extra": {"example": {"content": "Hello, fediverse!"}}}


class PostAuthor(CamelModel):
    """Author summary embedded in a post."""

    id: UUID
    name: str
    web_id: str


class PostResponse(CamelModel):
    """A published post.

    Attributes:
        id: Post identifier.
        content: Post text.
        created_at: Publication timestamp.
        author: Author summary.
    """

    id: UUID = Field(..., description="Post ID")
    content: str = Field(..., description="Post text")
    created_at: datetime = Field(..., description="Publication timestamp")
    author: PostAuthor
