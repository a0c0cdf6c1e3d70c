"""Async SQLAlchemy engine and session factory.

One engine with connection pooling for the whole process. Route handlers
get a session per request through ``get_db``; readers that fan out (the
dashboard) take the factory through ``get_session_factory`` and open one
session per concurrent query, since an AsyncSession can't be shared
between concurrent tasks.
"""

from collections.abc import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from clientdesk.config import settings


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on FK enforcement for SQLite so ON DELETE CASCADE works."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    # SQLite doesn't support pool_size
    pool_args = (
        {"pool_size": 5, "max_overflow": 15} if url.startswith("postgresql") else {}
    )
    engine = create_async_engine(url, echo=echo, **pool_args)
    enable_sqlite_foreign_keys(engine)
    return engine


engine = build_engine(settings.database_url, echo=settings.debug)

# Session factory: each request gets its own session.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency — yields a session per request, auto-closes."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """FastAPI dependency — the factory itself, for concurrent readers."""
    return async_session_factory
