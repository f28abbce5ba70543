"""
construction_tracker.db.dao.projects

Entity store for `ProjectRow`.

Responsibilities:
- Live and single-shot reads of projects, oldest first.
- Upsert/update/delete; deleting a project cascades to its materials in the
  same transaction (SQLite foreign key action).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, literal_column, select, update
from sqlalchemy.dialects.sqlite import insert

from construction_tracker.db.live import LiveQuery
from construction_tracker.db.models import ProjectRow, row_values

if TYPE_CHECKING:
    from construction_tracker.db.database import ConstructionDatabase

_projects = ProjectRow.__table__


class ProjectDao:
    def __init__(self, db: ConstructionDatabase) -> None:
        self._db = db

    def observe_all(self) -> LiveQuery[list[ProjectRow]]:
        return LiveQuery(self._db.tracker, ["projects"], self.get_all)

    async def get_all(self) -> list[ProjectRow]:
        stmt = select(ProjectRow).order_by(
            ProjectRow.created_at, literal_column("projects.rowid")
        )
        async with self._db.read("projects.get_all") as session:
            return list((await session.execute(stmt)).scalars().all())

    async def get_by_id(self, project_id: str) -> ProjectRow | None:
        async with self._db.read("projects.get_by_id") as session:
            return await session.get(ProjectRow, project_id)

    async def upsert(self, row: ProjectRow) -> None:
        values = row_values(row)
        stmt = insert(_projects).values(values)
        # Update in place on id conflict: a delete+insert REPLACE would fire the
        # cascade and wipe the project's materials.
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"],
            set_={col: v for col, v in values.items() if not col.primary_key},
        )
        async with self._db.write("projects.upsert", "projects") as session:
            await session.execute(stmt)

    async def update(self, row: ProjectRow) -> int:
        values = {col: v for col, v in row_values(row).items() if not col.primary_key}
        stmt = update(_projects).where(_projects.c.id == row.id).values(values)
        async with self._db.write("projects.update", "projects") as session:
            return (await session.execute(stmt)).rowcount

    async def delete(self, row: ProjectRow) -> int:
        stmt = delete(_projects).where(_projects.c.id == row.id)
        # Materials are listed so their live queries see the cascade.
        async with self._db.write("projects.delete", "projects", "materials") as session:
            return (await session.execute(stmt)).rowcount
