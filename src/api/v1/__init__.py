"""API v1 router aggregation.

This module combines all API routers into a single router that can be
mounted on the main application under API_PREFIX.
"""

from fastapi import APIRouter

from src.api.v1.auth import router as auth_router
from src.api.v1.posts import router as posts_router
from src.api.v1.providers import router as providers_router

# Create main API router
api_router = APIRouter()

# Login / logout / signup (no prefix, matches client routes)
api_router.include_router(auth_router)

# Posts - auth required
api_router.include_router(posts_router)

# Pod provider catalog - no auth required
api_router.include_router(providers_router)
