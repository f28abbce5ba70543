"""
tests.test_database

Process-wide database lifecycle: one instance, built once, reusable after close.
"""

from __future__ import annotations

import threading
import time

import pytest
import structlog

from construction_tracker.db import database as database_module
from construction_tracker.db.database import (
    ConstructionDatabase,
    close_database,
    get_database,
)
from construction_tracker.db.migrations import SCHEMA_VERSION
from construction_tracker.settings import Settings


@pytest.mark.asyncio
async def test_concurrent_first_access_builds_one_instance(
    settings: Settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    built: list[ConstructionDatabase] = []

    class SlowDatabase(ConstructionDatabase):
        def __init__(self, settings: Settings) -> None:
            time.sleep(0.05)  # widen the race window
            super().__init__(settings)
            built.append(self)

    monkeypatch.setattr(database_module, "ConstructionDatabase", SlowDatabase)
    await close_database()

    barrier = threading.Barrier(8)
    seen: list[ConstructionDatabase] = []
    seen_lock = threading.Lock()

    def _access() -> None:
        barrier.wait()
        instance = get_database(settings)
        with seen_lock:
            seen.append(instance)

    threads = [threading.Thread(target=_access) for _ in range(8)]
    try:
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(built) == 1
        assert len(seen) == 8
        assert all(instance is built[0] for instance in seen)
        assert get_database() is built[0]
    finally:
        await close_database()


@pytest.mark.asyncio
async def test_shared_instance_opens_lazily_and_once(settings: Settings) -> None:
    await close_database()
    db = get_database(settings)
    try:
        assert not db.is_open
        assert await db.open() == SCHEMA_VERSION
        assert await db.open() == SCHEMA_VERSION
        assert db.is_open
    finally:
        await close_database()

    rebuilt = get_database(settings)
    try:
        assert rebuilt is not db
    finally:
        await close_database()


@pytest.mark.asyncio
async def test_first_dao_call_runs_migrations(settings: Settings) -> None:
    db = ConstructionDatabase(settings)
    try:
        assert await db.material_dao().get_by_project("p1") == []
        assert db.is_open
    finally:
        await db.close()


@pytest.mark.asyncio
async def test_shared_instance_configures_logging(settings: Settings) -> None:
    await close_database()
    structlog.reset_defaults()
    assert not structlog.is_configured()
    try:
        get_database(settings)
        assert structlog.is_configured()
    finally:
        await close_database()
