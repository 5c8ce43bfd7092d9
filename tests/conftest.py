"""Pytest configuration for PodPost tests.

This configuration ensures:
1. Tests run against the "testing" environment with a fixed signing key
2. Every test gets its own throwaway SQLite database file
3. API tests never contact a real pod provider (fake registry)
"""

import asyncio
import os

# Must be set before src.core.config builds the global settings
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-podpost")
os.environ.setdefault("POD_PROVIDERS", "https://mypod.store,http://localhost:3000")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

import src.models  # noqa: E402, F401
from src.core.database import build_engine, build_session_maker, get_session  # noqa: E402
from src.core.result import Success  # noqa: E402
from src.providers.activitypod import ProviderSession  # noqa: E402
from src.providers.registry import (  # noqa: E402
    PodProviderRegistry,
    UnsupportedProviderError,
    get_provider_registry,
    normalize_endpoint,
)

PROVIDER_ENDPOINT = "https://mypod.store"


class FakePodProvider:
    """Stand-in for ActivityPodProvider returning preconfigured results."""

    def __init__(self, base_url: str):
        self.base_url = base_url
        self.login_result = Success(
            value=ProviderSession(
                token="provider-token", web_id=f"{base_url}/alice", new_user=False
            )
        )
        self.signup_result = Success(
            value=ProviderSession(
                token="provider-token", web_id=f"{base_url}/alice", new_user=True
            )
        )
        self.calls: list[tuple[str, str]] = []

    async def login(self, username: str, password: str):
        self.calls.append(("login", username))
        return self.login_result

    async def signup(self, username: str, password: str, email: str):
        self.calls.append(("signup", username))
        return self.signup_result


class FakePodProviderRegistry(PodProviderRegistry):
    """Registry handing out one FakePodProvider per configured endpoint."""

    def __init__(self, endpoints: list[str]):
        super().__init__(endpoints)
        self.providers = {e: FakePodProvider(e) for e in self.list_providers()}

    def get_provider(self, endpoint: str) -> FakePodProvider:  # type: ignore[override]
        normalized = normalize_endpoint(endpoint)
        if normalized not in self.providers:
            raise UnsupportedProviderError(endpoint)
        return self.providers[normalized]


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database or mocked HTTP"
    )
    config.addinivalue_line("markers", "api: API tests through the FastAPI app")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if asyncio.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


@pytest.fixture
def database_url(tmp_path) -> str:
    """Create a fresh SQLite database with all tables and return its async URL."""
    db_file = tmp_path / "podpost_test.db"

    sync_engine = create_engine(f"sqlite:///{db_file}")
    SQLModel.metadata.create_all(sync_engine)
    sync_engine.dispose()

    return f"sqlite+aiosqlite:///{db_file}"


@pytest.fixture
def session_maker(database_url):
    """Session factory for the per-test database.

    NullPool opens a connection per session, so the factory is usable from
    any event loop (pytest's or TestClient's).
    """
    engine = build_engine(database_url, poolclass=NullPool)
    return build_session_maker(engine)


@pytest_asyncio.fixture
async def db_session(session_maker):
    """Provide a database session on the per-test database."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def fake_registry() -> FakePodProviderRegistry:
    """Registry of fake pod providers for the configured endpoints."""
    return FakePodProviderRegistry([PROVIDER_ENDPOINT, "http://localhost:3000"])


@pytest.fixture
def client(session_maker, fake_registry):
    """TestClient with database and provider registry overridden."""
    from src.main import app

    async def override_get_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_provider_registry] = lambda: fake_registry

    yield TestClient(app)

    app.dependency_overrides.clear()
