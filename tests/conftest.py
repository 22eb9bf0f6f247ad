"""
Album API - Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   A real SQL store on an in-memory aiosqlite database (StaticPool keeps
       the single connection alive for the whole test), and an HTTPX
       AsyncClient talking to the app over ASGITransport.

Fixture Hierarchy (all function-scoped):
    engine ──▶ album_store ──▶ test_app ──▶ test_client
    sample_album_data
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

# Keep test output quiet; must be set before the app module is imported
os.environ["LOG_LEVEL"] = "WARNING"

from album_api.config import Settings  # noqa: E402
from album_api.database import Base  # noqa: E402
from album_api.main import create_app  # noqa: E402
from album_api.models.album import Album  # noqa: E402,F401
from album_api.services.album_store import AlbumStore  # noqa: E402

SQLITE_MEMORY_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine():
    """In-memory database with the albums table created."""
    engine = create_async_engine(
        SQLITE_MEMORY_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def bare_engine():
    """In-memory database without any tables."""
    engine = create_async_engine(
        SQLITE_MEMORY_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield engine
    await engine.dispose()


@pytest.fixture
def album_store(engine):
    return AlbumStore.from_engine(engine)


@pytest.fixture
def test_settings():
    """Settings isolated from the developer's environment and .env file."""
    return Settings(_env_file=None, database_url=SQLITE_MEMORY_URL, log_level="WARNING")


@pytest.fixture
def test_app(test_settings, album_store):
    return create_app(settings=test_settings, store=album_store)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/albums")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_album_data():
    return {"id": "a1", "title": "T", "artist": "Ar", "price": 9.99}
