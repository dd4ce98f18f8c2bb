"""Database handle: async engine, session factory and schema lifecycle.

A single ``Database`` is constructed at application startup, stored on
``app.state.database`` and disposed at shutdown.  Routes receive sessions
through the ``get_db`` dependency rather than importing a global engine.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from agent_market.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns one async engine and the session factory bound to it."""

    def __init__(self, url: str, *, echo: bool = False, **engine_kwargs: Any) -> None:
        self.url = url
        self.is_sqlite = url.startswith("sqlite")
        self.engine = create_async_engine(url, echo=echo, **engine_kwargs)
        self.sessionmaker = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        # SQLite-only: WAL + busy_timeout for concurrent access, FK enforcement.
        if self.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _set_sqlite_pragma)

    @classmethod
    def from_settings(cls, cfg: Settings) -> "Database":
        # PostgreSQL needs connection pool settings, SQLite does not
        engine_kwargs: dict[str, Any] = {}
        if not cfg.database_url.startswith("sqlite"):
            engine_kwargs.update({
                "pool_size": cfg.db_pool_size,
                "max_overflow": cfg.db_max_overflow,
                "pool_timeout": cfg.db_pool_timeout,
                "pool_recycle": cfg.db_pool_recycle,
                "pool_pre_ping": True,
            })
        return cls(cfg.database_url, echo=cfg.db_echo, **engine_kwargs)

    def session(self) -> AsyncSession:
        return self.sessionmaker()

    async def create_all(self) -> None:
        """Create all tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        """Drop all tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Dispose of the engine connection pool. Call on shutdown."""
        await self.engine.dispose()
        logger.info("Database connection pool closed")


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields a session from the app's database."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
