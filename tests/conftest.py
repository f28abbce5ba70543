"""
tests.conftest

Shared fixtures: a throwaway SQLite file per test, an opened database, and the
two repositories on top of it.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio

from construction_tracker.db.database import ConstructionDatabase
from construction_tracker.repositories import MaterialRepository, ProjectRepository
from construction_tracker.settings import Settings


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "construction_test.db"


@pytest.fixture
def settings(db_path: Path, tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{db_path}",
        export_dir=str(tmp_path / "exports"),
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def db(settings: Settings) -> AsyncIterator[ConstructionDatabase]:
    database = ConstructionDatabase(settings)
    await database.open()
    try:
        yield database
    finally:
        await database.close()


@pytest.fixture
def projects(db: ConstructionDatabase) -> ProjectRepository:
    return ProjectRepository(db)


@pytest.fixture
def materials(db: ConstructionDatabase) -> MaterialRepository:
    return MaterialRepository(db)
