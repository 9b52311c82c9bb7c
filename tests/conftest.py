"""Pytest configuration and shared fixtures"""

import os

# Settings are read at import time; keep tests off the production database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_pageantry.db")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
import httpx
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import Base, create_engine, create_session_factory, get_db
from backend.app import models  # noqa: F401


@pytest.fixture
async def db_engine(tmp_path):
    """Engine on a fresh SQLite file per test with the schema created"""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test_pageantry.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def test_session_factory(db_engine):
    """Create test session factory"""
    return create_session_factory(db_engine)


@pytest.fixture
async def db_session(test_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Database session for arranging and inspecting test data"""
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client for the app with get_db bound to the test database"""
    from backend.app.main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
