"""Post service: publishing and listing short posts.

Note: This service is asynchronous (uses `async def`) because it performs
database I/O operations.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from src.core.constants import POSTS_PAGE_SIZE_DEFAULT
from src.models.post import Post
from src.models.user import User

logger = structlog.get_logger(__name__)


class PostService:
    """Service for post operations.

    Attributes:
        session: Database session for async operations
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_posts(
        self,
        limit: int = POSTS_PAGE_SIZE_DEFAULT,
        offset: int = 0,
        author_web_id: str | None = None,
    ) -> list[tuple[Post, User]]:
        """List posts newest first, each paired with its author.

        Args:
            limit: Maximum number of posts to return.
            offset: Number of posts to skip.
            author_web_id: Only return posts by this Web ID.

        Returns:
            List of (post, author) tuples.
        """
        query = select(Post, User).join(User, col(Post.author_id) == col(User.id))
        if author_web_id is not None:
            query = query.where(col(User.web_id) == author_web_id)
        query = (
            query.order_by(col(Post.created_at).desc(), col(Post.id).desc())
            .offset(offset)
            .limit(limit)
        )

        result = await self.session.execute(query)
        return [(post, author) for post, author in result.all()]

    async def create_post(self, author: User, content: str) -> Post:
        """Publish a post.

        Args:
            author: Authenticated user publishing the post.
            content: Post text, already validated by the request schema.

        Returns:
            The persisted post.
        """
        post = Post(author_id=author.id, content=content.strip())
        self.session.add(post)
        await self.session.commit()

        logger.info("post_created", post_id=str(post.id), author_id=str(author.id))
        return post
