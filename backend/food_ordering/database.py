"""
Food Ordering Backend — Database Session Management
=====================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   A `Database` object owns one engine and one session factory. It is
       created once at startup, stored on `app.state.database`, and handed
       to route handlers through the `get_db_session` dependency. Shutdown
       disposes the engine.
Who:   Built by the lifespan handler in main.py (or by test fixtures).

Connection Pooling (PostgreSQL):
    pool_size=20, max_overflow=10, pool_pre_ping, pool_recycle=3600.
    SQLite URLs (tests, local dev) use a StaticPool instead so that an
    in-memory database survives across sessions.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from food_ordering.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object, which Alembic and `Database.create_all`
    use for schema management.
    """
    pass


class Database:
    """
    Process-wide handle on the persistent store.

    Attributes:
        engine:          AsyncEngine holding the connection pool
        session_factory: async_sessionmaker producing one session per request
    """

    def __init__(self, url: str, config: Optional[Settings] = None):
        config = config or default_settings
        self.url = url

        if url.startswith("sqlite"):
            # One shared connection, otherwise each session would see its own
            # empty in-memory database
            self.engine: AsyncEngine = create_async_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=config.log_level == "DEBUG",
            )
        else:
            self.engine = create_async_engine(
                url,
                pool_size=config.db_pool_size,
                max_overflow=config.db_max_overflow,
                pool_pre_ping=config.db_pool_pre_ping,
                pool_recycle=3600,
                echo=config.log_level == "DEBUG",
            )

        # expire_on_commit=False: response models read attributes after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "Database":
        config = config or default_settings
        return cls(config.database_url, config)

    async def create_all(self) -> None:
        """Create every table registered on `Base.metadata` if missing."""
        # Models must be imported so their tables are registered
        from food_ordering.models import menu_item, user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def ping(self) -> bool:
        """Run SELECT 1; used by the health check."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close all pooled connections. Called once at shutdown."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """Return the Database attached to the running application."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not initialized; the application lifespan did not run")
    return database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the application's session factory
        2. Yields it to the route handler
        3. On error: rolls back any uncommitted work and re-raises
        4. Always: closes the session (returns connection to pool)

    Stores commit their own writes, so nothing is committed here.

    Example usage in a route:
        @router.get("/all-menus")
        async def list_menus(db: AsyncSession = Depends(get_db_session)):
            return await catalog_store.list_all(db)
    """
    database = get_database(request)
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
