"""Database connection and session management.

This module handles all database connectivity for PodPost: the lazily created
async engine, the session factory, and the FastAPI session dependency. It uses
SQLModel table metadata on top of async SQLAlchemy (asyncpg in production,
aiosqlite in tests).

Example:
    >>> from src.core.database import get_session
    >>> from fastapi import Depends
    >>>
    >>> @app.get("/items")
    >>> async def get_items(session: AsyncSession = Depends(get_session)):
    >>>     result = await session.execute(select(Item))
    >>>     return result.scalars().all()
"""

from typing import Any, AsyncGenerator

import structlog
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from src.core.config import get_settings

logger = structlog.get_logger(__name__)

# Global engine instance (created on first use)
_engine: AsyncEngine | None = None
_async_session_maker: async_sessionmaker[AsyncSession] | None = None


def build_engine(database_url: str, *, echo: bool = False, **kwargs: Any) -> AsyncEngine:
    """Create an async engine with pool settings suited to the backend.

    SQLite engines do not accept queue-pool sizing arguments, so those are only
    applied to server databases.

    Args:
        database_url: SQLAlchemy async URL.
        echo: Log emitted SQL.
        **kwargs: Extra create_async_engine arguments (e.g. poolclass).

    Returns:
        Configured AsyncEngine.
    """
    options: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
    if not database_url.startswith("sqlite") and "poolclass" not in kwargs:
        options.update(pool_size=5, max_overflow=10)
    options.update(kwargs)
    return create_async_engine(database_url, **options)


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_engine() -> AsyncEngine:
    """Get or create the global async database engine.

    Returns:
        The global AsyncEngine instance for database connections.
    """
    global _engine

    if _engine is None:
        settings = get_settings()
        _engine = build_engine(settings.database_url, echo=settings.db_echo)

    return _engine


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get or create the global async session maker."""
    global _async_session_maker

    if _async_session_maker is None:
        _async_session_maker = build_session_maker(get_engine())

    return _async_session_maker


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency injection function for database sessions.

    Provides a session per request. Services commit explicitly; anything left
    uncommitted when the request fails is rolled back.

    Yields:
        An AsyncSession instance for database operations.
    """
    session_maker = get_session_maker()
    async with session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create all tables defined by SQLModel models.

    Development and testing only. Production schemas are managed by Alembic.

    Args:
        engine: Engine to use (defaults to the global engine).
    """
    # Make sure every table is registered on the metadata
    import src.models  # noqa: F401

    engine = engine or get_engine()

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    logger.info("database_tables_created")


async def close_db() -> None:
    """Dispose of the engine and its connection pool."""
    global _engine, _async_session_maker

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _async_session_maker = None
        logger.info("database_connections_closed")


async def check_db_connection() -> bool:
    """Check if the database is accessible and responsive.

    Returns:
        True if the database is accessible, False otherwise.
    """
    try:
        async with get_engine().connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            _ = result.scalar()
        return True
    except (SQLAlchemyError, OSError) as e:
        logger.warning("database_connection_check_failed", error=str(e))
        return False
