"""Shared test fixtures for the inquiry_service package."""
from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from inquiry_service.application.app import App
from inquiry_service.container import get_session
from inquiry_service.infrastructure.db.orm import Base

# One in-memory SQLite database per test; StaticPool keeps it on a single connection
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def mock_repo():
    """Async mock repository for unit tests."""
    return AsyncMock()


@pytest.fixture
async def test_engine():
    """In-memory SQLite engine with the schema created."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Database session, rolled back after each test."""
    session_factory = async_sessionmaker(test_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def app() -> App:
    return App()


@pytest.fixture
async def client(app, test_engine, test_session):
    """HTTP client against a fresh App backed by the test database.

    Every request shares ``test_session``, so requests must be sent one at a time.
    """

    async def override_get_session():
        yield test_session

    app.container.engine.override(test_engine)
    app.fastapi.dependency_overrides[get_session] = override_get_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.fastapi.dependency_overrides.clear()
    app.container.engine.reset_override()
