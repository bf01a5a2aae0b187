"""Database handle — lazily creates the async engine exactly once.

A :class:`Database` is constructed explicitly (typically in the app
lifespan) and passed to whatever needs it; there is no module-level engine.

The first caller of :meth:`Database.get_engine` creates the engine and
checks connectivity with ``SELECT 1``.  Concurrent first callers wait on
the same lock and then reuse that engine, so only one connection pool is
ever built.  If the connectivity check fails the engine is discarded and
the error propagates; the next caller tries again.
"""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from devprofile_db.config import get_async_url, get_max_overflow, get_pool_size

logger = logging.getLogger(__name__)


class Database:
    """Owns one async engine and its session factory.

    Args:
        url: async SQLAlchemy URL (defaults to :func:`get_async_url`)
        pool_size / max_overflow: connection pool tuning (default from env)
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        pool_size: int | None = None,
        max_overflow: int | None = None,
        echo: bool = False,
    ) -> None:
        self._url = url or get_async_url()
        self._pool_size = pool_size if pool_size is not None else get_pool_size()
        self._max_overflow = max_overflow if max_overflow is not None else get_max_overflow()
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._engine is not None

    async def get_engine(self) -> AsyncEngine:
        """Return the engine, creating and checking it on first use."""
        if self._engine is not None:
            return self._engine
        async with self._lock:
            # Another caller may have finished initialising while we waited
            if self._engine is None:
                engine = create_async_engine(
                    self._url,
                    echo=self._echo,
                    pool_size=self._pool_size,
                    max_overflow=self._max_overflow,
                )
                try:
                    async with engine.connect() as conn:
                        await conn.execute(text("SELECT 1"))
                except Exception:
                    await engine.dispose()
                    raise
                self._session_factory = async_sessionmaker(
                    bind=engine,
                    class_=AsyncSession,
                    expire_on_commit=False,
                )
                self._engine = engine
                logger.info("Database engine initialised")
        return self._engine

    async def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Return the session factory bound to the (lazily created) engine."""
        await self.get_engine()
        assert self._session_factory is not None
        return self._session_factory

    async def ping(self) -> None:
        """Run ``SELECT 1``; raises if the database is unreachable."""
        engine = await self.get_engine()
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Dispose the connection pool (call on app shutdown)."""
        async with self._lock:
            if self._engine is not None:
                await self._engine.dispose()
                self._engine = None
                self._session_factory = None
                logger.info("Database engine disposed")
