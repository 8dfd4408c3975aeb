"""Database engine and session plumbing.

`SessionMaker` lives at module level so tests can swap it for one bound to a
throwaway database; `get_session()` always resolves it at call time.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy import event
from sqlalchemy.engine.interfaces import DBAPIConnection
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import ConnectionPoolEntry

from washdesk.db.models import Base
from washdesk.settings import get_settings


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite only honours FK constraints (and their ON DELETE rules) per connection."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_foreign_keys(dbapi_connection: DBAPIConnection, _: ConnectionPoolEntry) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine(database_url: str) -> AsyncEngine:
    engine = create_async_engine(database_url, future=True)
    enable_sqlite_foreign_keys(engine)
    return engine


def create_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, expire_on_commit=False)


engine: AsyncEngine = create_engine(get_settings().database_url)
SessionMaker: async_sessionmaker[AsyncSession] = create_sessionmaker(engine)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with SessionMaker() as session:
        yield session


async def create_schema(bind: AsyncEngine | None = None) -> None:
    target = bind if bind is not None else engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


__all__ = [
    "SessionMaker",
    "create_engine",
    "create_schema",
    "create_sessionmaker",
    "enable_sqlite_foreign_keys",
    "engine",
    "get_session",
]
