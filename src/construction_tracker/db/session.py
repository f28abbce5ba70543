"""
construction_tracker.db.session

Async SQLAlchemy engine + session factory helpers.

Responsibilities:
- Create the aiosqlite-backed async engine from settings.
- Enforce foreign keys and real transactions on every SQLite connection.
- Create the async sessionmaker with safe defaults.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from construction_tracker.settings import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    url = make_url(settings.database_url)
    kwargs: dict[str, Any] = {
        "connect_args": {"timeout": settings.busy_timeout_seconds},
    }
    # In-memory databases use a single static connection; file databases get a
    # small pool, each connection backed by its own aiosqlite worker thread.
    if url.database not in (None, "", ":memory:"):
        kwargs["pool_size"] = settings.pool_size
        kwargs["max_overflow"] = 0

    engine = create_async_engine(url, **kwargs)
    _install_sqlite_hooks(engine)
    return engine


def _install_sqlite_hooks(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, _connection_record: Any) -> None:
        # Hand transaction control to SQLAlchemy (see `_on_begin`) so DDL is
        # transactional too; the driver would otherwise only wrap DML.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        # ON DELETE CASCADE is inert unless enabled per connection.
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps rows readable after the transaction closes.
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )


# --- Module Notes -----------------------------------------------------------
# Only `db.database.ConstructionDatabase` calls `create_engine`; every other
# caller goes through the shared database instance.
