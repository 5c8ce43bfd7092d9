"""Database models for the PodPost application."""

from src.models.base import PodPostBase, TimestampedBase
from src.models.post import Post
from src.models.user import User

__all__ = [
    "PodPostBase",
    "TimestampedBase",
    "User",
    "Post",
]
