"""
Fleet API — Database Engine & Session Management
=================================================

What:  Declarative base for all ORM models and the `Database` object that owns
       the async engine and session factory.
Why:   One explicitly constructed object per application replaces a module-level
       connection. The app factory builds it, stores it on `app.state`, and every
       store instance receives it through dependency injection.
How:   `Database(settings)` creates an async engine (lazy: no connection is opened
       until the first query) and an `async_sessionmaker`.
When:  Created in create_app(); tables are created and the engine disposed by
       the application lifespan.

Connection Pooling Strategy:
    PostgreSQL: pool_size + max_overflow persistent/burst connections,
                pool_pre_ping to catch stale connections, hourly recycle.
    SQLite:     the dialect picks its own pool; sizing arguments are not passed.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from fleet_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Registers every model with a single metadata object, which both
    `Database.create_all()` and Alembic's autogenerate read.
    """
    pass


class Database:
    """
    Owns the engine and session factory for one application instance.

    Usage:
        db = Database(settings)
        async with db.session() as session:
            await session.execute(...)
        await db.dispose()
    """

    def __init__(self, settings: Settings):
        self.url = settings.database_url
        engine_kwargs = {"echo": settings.log_level == "DEBUG"}
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)

        # expire_on_commit=False: records stay readable after the session closes,
        # since services serialize them after the store returns
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session that commits on success and rolls back on error.

        Each store operation runs in its own session: every operation touches a
        single record, so there are no multi-step transactions to share.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create missing tables for every registered model."""
        # Import models so they register with Base.metadata
        from fleet_api import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))

    async def ping(self) -> bool:
        """Lightweight connectivity check used by the health endpoint."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()
