"""
tests.test_migrations

Schema creation, the v1 -> v2 upgrade, and failure handling.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic.operations import Operations

from construction_tracker.db.database import ConstructionDatabase
from construction_tracker.db.migrations import (
    MIGRATIONS,
    SCHEMA_VERSION,
    Migration,
    migrate,
    plan_migrations,
)
from construction_tracker.db.session import create_engine
from construction_tracker.errors import MigrationError
from construction_tracker.settings import Settings
from helpers import (
    create_v1_database,
    set_user_version,
    sqlite_columns,
    sqlite_rows,
    sqlite_user_version,
)


@pytest.mark.asyncio
async def test_fresh_database_is_created_at_current_version(
    settings: Settings, db_path: Path
) -> None:
    engine = create_engine(settings)
    try:
        assert await migrate(engine) == SCHEMA_VERSION
    finally:
        await engine.dispose()

    assert sqlite_user_version(db_path) == 2
    assert "unit" in sqlite_columns(db_path, "materials")
    assert sqlite_columns(db_path, "projects") == [
        "id",
        "name",
        "description",
        "imageUri",
        "createdAt",
    ]


@pytest.mark.asyncio
async def test_v1_database_gains_unit_column_with_default(
    settings: Settings, db_path: Path
) -> None:
    create_v1_database(db_path)
    engine = create_engine(settings)
    try:
        await migrate(engine)
    finally:
        await engine.dispose()

    assert sqlite_user_version(db_path) == 2
    assert sqlite_rows(db_path, "SELECT id, name, unit FROM materials") == [
        ("m1", "Cement", "pcs")
    ]


@pytest.mark.asyncio
async def test_second_migration_run_is_a_no_op(settings: Settings, db_path: Path) -> None:
    create_v1_database(db_path)
    engine = create_engine(settings)
    try:
        await migrate(engine)
        columns_once = sqlite_columns(db_path, "materials")
        rows_once = sqlite_rows(db_path, "SELECT * FROM materials")

        assert await migrate(engine) == 2
    finally:
        await engine.dispose()

    assert sqlite_columns(db_path, "materials") == columns_once
    assert sqlite_rows(db_path, "SELECT * FROM materials") == rows_once


@pytest.mark.asyncio
async def test_unit_step_tolerates_existing_column(settings: Settings, db_path: Path) -> None:
    # A v2-shaped file whose version tag was lost still upgrades cleanly.
    engine = create_engine(settings)
    try:
        await migrate(engine)
        set_user_version(db_path, 1)
        assert await migrate(engine) == 2
    finally:
        await engine.dispose()

    assert sqlite_columns(db_path, "materials").count("unit") == 1


@pytest.mark.asyncio
async def test_unversioned_legacy_file_is_treated_as_v1(
    settings: Settings, db_path: Path
) -> None:
    create_v1_database(db_path, stamp_version=False)
    engine = create_engine(settings)
    try:
        await migrate(engine)
    finally:
        await engine.dispose()

    assert sqlite_user_version(db_path) == 2
    assert "unit" in sqlite_columns(db_path, "materials")


@pytest.mark.asyncio
async def test_failing_step_rolls_back_and_is_fatal(settings: Settings, db_path: Path) -> None:
    def _broken(op: Operations) -> None:
        op.add_column("materials", sa.Column("unit", sa.Text(), server_default=sa.text("'pcs'")))
        raise RuntimeError("disk on fire")

    create_v1_database(db_path)
    engine = create_engine(settings)
    try:
        with pytest.raises(MigrationError) as excinfo:
            await migrate(engine, migrations=[Migration(1, 2, "broken", _broken)])
    finally:
        await engine.dispose()

    assert isinstance(excinfo.value.__cause__, RuntimeError)
    # Nothing from the failed step is left behind.
    assert sqlite_user_version(db_path) == 1
    assert "unit" not in sqlite_columns(db_path, "materials")


@pytest.mark.asyncio
async def test_database_refuses_use_after_failed_open(settings: Settings, db_path: Path) -> None:
    create_v1_database(db_path)
    set_user_version(db_path, 99)

    db = ConstructionDatabase(settings)
    try:
        with pytest.raises(MigrationError) as first:
            await db.open()
        with pytest.raises(MigrationError) as second:
            await db.project_dao().get_by_id("p1")
        assert second.value is first.value
        assert not db.is_open
    finally:
        await db.close()


def test_plan_walks_steps_in_order() -> None:
    assert plan_migrations(1, 2) == list(MIGRATIONS)
    assert plan_migrations(2, 2) == []


def test_plan_rejects_gaps_and_downgrades() -> None:
    with pytest.raises(MigrationError):
        plan_migrations(0, 2, migrations=MIGRATIONS)
    with pytest.raises(MigrationError):
        plan_migrations(3, 2)
