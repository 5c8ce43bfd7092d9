"""
Main FastAPI application entry point.

This module initializes the FastAPI application instance: logging, CORS,
request tracing, RFC 7807 error handling and the API routers.

Run locally:
    uvicorn src.main:app --reload
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.errors import register_exception_handlers
from src.api.middleware.trace_middleware import TraceMiddleware
from src.api.v1 import api_router
from src.core.config import settings
from src.core.database import check_db_connection, close_db, init_db
from src.core.logging_config import configure_logging
from src.schemas.common import HealthResponse

configure_logging(settings)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Handles startup and shutdown events:
    - Startup: optional table creation outside production, connectivity check
    - Shutdown: dispose of the database engine

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment.value,
    )

    if settings.db_auto_create and not settings.is_production:
        await init_db()

    if not await check_db_connection():
        logger.warning("database_unreachable_at_startup")

    yield

    await close_db()
    logger.info("application_stopped")


# Initialize FastAPI application with settings and lifespan
app = FastAPI(
    title=settings.app_name,
    description="Short posts for Solid pod users",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Browser clients send the auth cookie cross-origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Trace-Id"],
)

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

# Register global exception handlers (RFC 7807 error responses)
register_exception_handlers(app)

app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
async def root() -> dict[str, str]:
    """
    Root endpoint - service banner.

    Returns:
        dict: Welcome message with API status.
    """
    return {
        "message": f"{settings.app_name} API",
        "status": "operational",
        "version": settings.app_version,
    }


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Health check endpoint for monitoring and load balancers.

    Returns:
        HealthResponse: Health status and version.
    """
    return HealthResponse(status="healthy", version=settings.app_version)


@app.get("/config")
async def get_config() -> JSONResponse:
    """
    Configuration debug endpoint (development only).

    Returns:
        JSONResponse: Configuration details (sanitized).
    """
    if not settings.is_development:
        return JSONResponse(
            status_code=403,
            content={"detail": "Config endpoint only available in development"},
        )

    return JSONResponse(
        content={
            "environment": settings.environment.value,
            "debug": settings.debug,
            "api": {
                "name": settings.app_name,
                "version": settings.app_version,
                "prefix": settings.api_prefix,
            },
            "database": {
                "url": "<redacted>",  # Never expose credentials
                "echo": settings.db_echo,
            },
            "auth": {
                "cookie_name": settings.auth_cookie_name,
                "header_name": settings.auth_header_name,
                "session_duration": settings.auth_cookie_duration,
            },
            "cors": {"origins": settings.cors_origins},
            "pod_providers": settings.pod_providers,
        }
    )
