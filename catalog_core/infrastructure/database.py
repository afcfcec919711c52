"""Database configuration and session management.

Provides the ``Database`` handle that owns the async SQLAlchemy engine
and session factory. One handle is opened at process start and disposed
at shutdown; it is passed explicitly to whatever needs storage access.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

logger = structlog.get_logger()

# Base class for models
Base = declarative_base()


class Database:
    """Async engine plus session factory for one relational store.

    Example usage:
        database = Database("sqlite+aiosqlite:///./catalog.db")
        await database.create_all()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        """Create the engine and session factory.

        Args:
            url: SQLAlchemy async database URL.
            echo: Whether to log emitted SQL.
        """
        self.url = url
        engine_kwargs: dict[str, Any] = {"echo": echo}

        if url.startswith("sqlite"):
            # aiosqlite runs each connection in its own thread
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url:
                # a memory database only lives as long as its single connection
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self.engine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session that is closed on exit.

        Transactions are left to the caller.

        Yields:
            AsyncSession for database operations.
        """
        async with self.session_factory() as session:
            yield session

    async def create_all(self) -> None:
        """Create database tables if they don't exist."""
        # make sure every model is registered on Base.metadata
        import catalog_core.catalog.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured", url=self.engine.url.render_as_string())

    async def ping(self) -> bool:
        """Check that the store answers a trivial query.

        Returns:
            True if the database is reachable.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed", error=str(e))
            return False

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
