"""Pytest fixtures for testing."""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-organizations-service")
os.environ.setdefault("DATABASE_CREATE_TABLES", "false")
os.environ.setdefault("ORGANIZATIONS_BACKEND_MODE", "ruby")

from orgsvc.core.config import get_settings
from orgsvc.core.database import get_db, init_models
from orgsvc.core.security import create_principal_token
from orgsvc.main import app
from orgsvc.models.base import Base

# One in-memory SQLite database shared by every connection of the engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    poolclass=StaticPool,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

BASE_URL = "http://test"


@pytest_asyncio.fixture(scope="function")
async def db() -> AsyncGenerator[AsyncSession, None]:
    """Create test database session.

    Tables are dropped first so a crashed previous test cannot leak rows.
    """
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await init_models(test_engine)

    async with TestSessionLocal() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database dependency override.

    Args:
        db: Test database session

    Yields:
        AsyncClient configured for testing
    """

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture()
def backend_mode(monkeypatch: pytest.MonkeyPatch):
    """Switch the organizations backend convention for one test."""

    settings = get_settings()

    def _set(mode: str) -> str:
        monkeypatch.setattr(settings, "organizations_backend_mode", mode)
        return mode

    return _set


@pytest.fixture()
def erlang_mode(backend_mode) -> str:
    return backend_mode("erlang")


@pytest.fixture()
def ruby_mode(backend_mode) -> str:
    return backend_mode("ruby")


@pytest.fixture()
def superuser_headers() -> dict[str, str]:
    token = create_principal_token("pivotal", superuser=True)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def user_headers() -> dict[str, str]:
    token = create_principal_token("normal-user")
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture()
async def test_org(client: AsyncClient, superuser_headers: dict[str, str]) -> dict:
    """Organization created through the API, with its create response."""
    payload = {"name": "test-org", "full_name": "test-org", "org_type": "Business"}
    response = await client.post("/organizations", json=payload, headers=superuser_headers)
    assert response.status_code == 201, response.text
    return {"name": "test-org", "create_response": response.json()}
