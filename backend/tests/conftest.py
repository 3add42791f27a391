"""
Food Ordering Backend — Test Configuration (conftest.py)
==========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test that needs persistence gets its own in-memory SQLite
       database (aiosqlite), so tests never share rows.

Fixture Hierarchy (all function-scoped):
    ├── database:        Database handle on a fresh in-memory SQLite DB
    ├── db_session:      AsyncSession from that handle (store unit tests)
    ├── mock_db_session: AsyncMock session for driver-failure tests
    ├── app:             FastAPI app with `database` attached to app.state
    └── test_client:     HTTPX AsyncClient bound to `app`
"""

import os

# Must run before any food_ordering import so Settings() picks them up
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["AUTH_RATE_LIMIT_REQUESTS"] = "1000"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from food_ordering.config import settings
from food_ordering.database import Database


@pytest_asyncio.fixture
async def database():
    """
    A Database handle with all tables created.

    StaticPool keeps the single in-memory connection alive for the whole
    test; disposing the engine throws the data away.
    """
    db = Database(settings.database_url, settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """An AsyncSession for calling stores directly."""
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A mock async session for simulating driver failures.

    Usage:
        mock_db_session.execute.side_effect = SQLAlchemyError("connection lost")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def app(database):
    """A fresh application instance wired to the test database."""
    from food_ordering.main import create_app

    application = create_app()
    application.state.database = database
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient that talks to the app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def soup_payload():
    return {"name": "Soup", "price": 5, "category": "starter"}


@pytest.fixture
def al_payload():
    return {"username": "al", "email": "a@x.com", "password": "pw1"}
