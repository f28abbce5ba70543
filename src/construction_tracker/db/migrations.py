"""
construction_tracker.db.migrations

Schema versioning for the embedded SQLite store.

Responsibilities:
- Declare the current schema version and the ordered migration steps.
- Detect the on-disk version (SQLite `PRAGMA user_version`).
- Bring an older database up to date, one atomic transaction per step.

Any failure here is fatal: `MigrationError` aborts database initialization and
the caller must not fall back to the stale schema.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine

from construction_tracker.db.base import Base
from construction_tracker.db.models import DEFAULT_UNIT
from construction_tracker.errors import MigrationError
from construction_tracker.observability.logging import get_logger

log = get_logger(__name__)

SCHEMA_VERSION = 2


@dataclass(frozen=True, slots=True)
class Migration:
    from_version: int
    to_version: int
    name: str
    upgrade: Callable[[Operations], None]


def column_exists(op: Operations, table_name: str, column_name: str) -> bool:
    columns = sa.inspect(op.get_bind()).get_columns(table_name)
    return any(c["name"] == column_name for c in columns)


def _add_material_unit(op: Operations) -> None:
    # Re-running against a database that already has the column is a no-op.
    if column_exists(op, "materials", "unit"):
        return
    op.add_column(
        "materials",
        sa.Column(
            "unit",
            sa.Text(),
            nullable=False,
            server_default=sa.text(f"'{DEFAULT_UNIT}'"),  # existing rows become "pcs"
        ),
    )


MIGRATIONS: tuple[Migration, ...] = (
    Migration(from_version=1, to_version=2, name="add_material_unit", upgrade=_add_material_unit),
)


def read_user_version(conn: Connection) -> int:
    return int(conn.exec_driver_sql("PRAGMA user_version").scalar() or 0)


def _write_user_version(conn: Connection, version: int) -> None:
    # PRAGMA arguments cannot be bound parameters.
    conn.exec_driver_sql(f"PRAGMA user_version = {int(version)}")


def detect_version(conn: Connection) -> int:
    """
    On-disk schema version. 0 means an empty database; an unversioned file
    that already holds our tables predates version tagging and counts as 1.
    """

    version = read_user_version(conn)
    if version == 0:
        tables = set(sa.inspect(conn).get_table_names())
        if tables & {"projects", "materials"}:
            return 1
    return version


def plan_migrations(
    current: int, target: int, migrations: Sequence[Migration] = MIGRATIONS
) -> list[Migration]:
    """Ordered steps taking `current` to `target`; raises if the chain has a gap."""

    if current > target:
        raise MigrationError(
            f"database schema version {current} is newer than supported version {target}"
        )
    by_source = {m.from_version: m for m in migrations}
    plan: list[Migration] = []
    version = current
    while version < target:
        step = by_source.get(version)
        if step is None or step.to_version != version + 1:
            raise MigrationError(f"no migration from version {version} to {version + 1}")
        plan.append(step)
        version = step.to_version
    return plan


def _create_schema(conn: Connection, version: int) -> None:
    Base.metadata.create_all(conn)
    _write_user_version(conn, version)


def _apply_step(conn: Connection, step: Migration) -> None:
    op = Operations(MigrationContext.configure(conn))
    step.upgrade(op)
    _write_user_version(conn, step.to_version)


async def migrate(
    engine: AsyncEngine,
    *,
    target: int = SCHEMA_VERSION,
    migrations: Sequence[Migration] = MIGRATIONS,
) -> int:
    """
    Open-time upgrade. Returns the final version (always `target` on success).

    A fresh database is created directly at `target`. Each upgrade step runs
    in its own transaction together with its version stamp, so a failing step
    leaves the database exactly at the previous version.
    """

    try:
        async with engine.begin() as conn:
            current = await conn.run_sync(detect_version)
            if current == 0:
                await conn.run_sync(_create_schema, target)
                log.info("schema_created", version=target)
                return target

        plan = plan_migrations(current, target, migrations)
        if not plan:
            log.debug("schema_current", version=current)
            return current

        for step in plan:
            async with engine.begin() as conn:
                await conn.run_sync(_apply_step, step)
            log.info(
                "migration_applied",
                migration=step.name,
                from_version=step.from_version,
                to_version=step.to_version,
            )
        return target
    except MigrationError:
        log.error("migration_failed", target=target, exc_info=True)
        raise
    except Exception as exc:
        log.error("migration_failed", target=target, exc_info=True)
        raise MigrationError(f"schema migration to version {target} failed: {exc}") from exc


# --- Module Notes -----------------------------------------------------------
# Steps use Alembic's `Operations` directly against the open connection; there
# is no alembic_version table, the integer `user_version` is the only tag.
