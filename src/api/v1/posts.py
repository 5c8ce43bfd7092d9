"""Posts API endpoints.

Endpoints:
    GET  /posts - List posts, newest first (auth required)
    POST /posts - Publish a post (auth required)
"""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user, get_post_service
from src.core.constants import POSTS_PAGE_SIZE_DEFAULT, POSTS_PAGE_SIZE_MAX
from src.models.post import Post
from src.models.user import User
from src.schemas.post import PostAuthor, PostCreateRequest, PostResponse
from src.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


def to_post_response(post: Post, author: User) -> PostResponse:
    """Build the API representation of a post."""
    return PostResponse(
        id=post.id,
        content=post.content,
        created_at=post.created_at,
        author=PostAuthor(id=author.id, name=author.name, web_id=author.web_id),
    )


@router.get("", response_model=list[PostResponse])
async def list_posts(
    limit: int = Query(
        POSTS_PAGE_SIZE_DEFAULT,
        ge=1,
        le=POSTS_PAGE_SIZE_MAX,
        description="Maximum number of posts",
    ),
    offset: int = Query(0, ge=0, description="Number of posts to skip"),
    author: str | None = Query(None, description="Only posts by this Web ID"),
    current_user: User = Depends(get_current_user),
    post_service: PostService = Depends(get_post_service),
):
    """List posts newest first.

    Args:
        limit: Page size (1..100).
        offset: Posts to skip.
        author: Optional author Web ID filter.
        current_user: Authenticated user.
        post_service: Post service dependency.

    Returns:
        List of posts with their authors.
    """
    rows = await post_service.list_posts(
        limit=limit, offset=offset, author_web_id=author
    )
    return [to_post_response(post, post_author) for post, post_author in rows]


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: PostCreateRequest,
    current_user: User = Depends(get_current_user),
    post_service: PostService = Depends(get_post_service),
):
    """Publish a post as the authenticated user.

    Returns:
        The created post.
    """
    post = await post_service.create_post(current_user, request.content)
    return to_post_response(post, current_user)
