"""
construction_tracker.db.database

Process-wide database instance and its lifecycle.

Responsibilities:
- Own the single engine, session factory and invalidation tracker.
- Run schema migrations once, on first use.
- Provide read/write session scopes; writes notify live queries on commit.
- Guarantee exactly one instance per process (`get_database`).
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from construction_tracker.db.dao.materials import MaterialDao
from construction_tracker.db.dao.projects import ProjectDao
from construction_tracker.db.live import InvalidationTracker
from construction_tracker.db.migrations import SCHEMA_VERSION, migrate
from construction_tracker.db.session import create_engine, create_sessionmaker
from construction_tracker.errors import MigrationError, translate_store_errors
from construction_tracker.observability.logging import configure_logging, get_logger
from construction_tracker.settings import Settings, get_settings

log = get_logger(__name__)


class ConstructionDatabase:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.engine = create_engine(settings)
        self.sessionmaker = create_sessionmaker(self.engine)
        self.tracker = InvalidationTracker()

        self._open_lock = asyncio.Lock()
        self._version: int | None = None
        self._failure: MigrationError | None = None

        self._projects = ProjectDao(self)
        self._materials = MaterialDao(self)

    def project_dao(self) -> ProjectDao:
        return self._projects

    def material_dao(self) -> MaterialDao:
        return self._materials

    @property
    def is_open(self) -> bool:
        return self._version is not None

    async def open(self) -> int:
        """
        Bring the schema to `SCHEMA_VERSION`. Idempotent; a failed attempt is
        remembered and every later call re-raises it.
        """

        if self._version is not None:
            return self._version
        async with self._open_lock:
            if self._failure is not None:
                raise self._failure
            if self._version is None:
                try:
                    self._version = await migrate(self.engine, target=SCHEMA_VERSION)
                except MigrationError as exc:
                    self._failure = exc
                    raise
                log.info("database_opened", version=self._version)
        return self._version

    @asynccontextmanager
    async def read(self, operation: str) -> AsyncIterator[AsyncSession]:
        await self.open()
        with translate_store_errors(operation):
            async with self.sessionmaker() as session:
                yield session

    @asynccontextmanager
    async def write(self, operation: str, *tables: str) -> AsyncIterator[AsyncSession]:
        """
        One transaction per write. Subscribers on `tables` are notified only
        after the commit succeeded.

        Once the block has finished the commit cannot be called back: cancelling
        the caller while it is in flight still lets it land and notify, and the
        cancellation is re-raised afterwards.
        """

        await self.open()
        with translate_store_errors(operation):
            async with self.sessionmaker() as session:
                yield session
                commit = asyncio.ensure_future(self._commit(session, operation, tables))
                try:
                    await asyncio.shield(commit)
                except asyncio.CancelledError:
                    await _settle(commit, operation)
                    raise

    async def _commit(
        self, session: AsyncSession, operation: str, tables: tuple[str, ...]
    ) -> None:
        await session.commit()
        log.debug("write_committed", operation=operation, tables=list(tables))
        self.tracker.notify(tables)

    async def close(self) -> None:
        await self.engine.dispose()
        log.info("database_closed")


async def _settle(commit: asyncio.Future[None], operation: str) -> None:
    """Wait out a commit whose caller was cancelled; the session stays open until then."""

    while not commit.done():
        try:
            await asyncio.wait({commit})
        except asyncio.CancelledError:
            continue
    if commit.cancelled():
        return
    exc = commit.exception()
    if exc is not None:
        log.warning("write_failed_after_cancel", operation=operation, error=str(exc))


_instance: ConstructionDatabase | None = None
_instance_lock = threading.Lock()


def get_database(settings: Settings | None = None) -> ConstructionDatabase:
    """
    The shared database. Constructed on first call under a lock; later calls
    return the cached instance without locking. `settings` only matters for the
    call that constructs it.
    """

    instance = _instance
    if instance is not None:
        return instance
    return _create_instance(settings)


def _create_instance(settings: Settings | None) -> ConstructionDatabase:
    global _instance
    with _instance_lock:
        if _instance is None:
            settings = settings or get_settings()
            # Callers outside the API get the same JSON logs as the service.
            configure_logging(service_name=settings.service_name, level=settings.log_level)
            _instance = ConstructionDatabase(settings)
            log.debug("database_instance_created", url=_instance.engine.url.render_as_string())
        return _instance


async def close_database() -> None:
    """Dispose the shared instance (app shutdown, tests). The next access rebuilds it."""

    global _instance
    with _instance_lock:
        instance, _instance = _instance, None
    if instance is not None:
        await instance.close()


# --- Module Notes -----------------------------------------------------------
# Nothing else may call `db.session.create_engine`: a second engine on the same
# file would bypass the invalidation tracker and live queries would go stale.
