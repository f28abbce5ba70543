"""
construction_tracker.db.dao.materials

Entity store for `MaterialRow`.

Responsibilities:
- Live and single-shot reads of one project's materials, oldest first.
- Upsert/update/delete of single materials, and bulk delete by project.

Writes against an unknown `projectId` fail on the foreign key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, literal_column, select, update
from sqlalchemy.dialects.sqlite import insert

from construction_tracker.db.live import LiveQuery
from construction_tracker.db.models import MaterialRow, row_values

if TYPE_CHECKING:
    from construction_tracker.db.database import ConstructionDatabase

_materials = MaterialRow.__table__


class MaterialDao:
    def __init__(self, db: ConstructionDatabase) -> None:
        self._db = db

    def observe_by_project(self, project_id: str) -> LiveQuery[list[MaterialRow]]:
        async def _fetch() -> list[MaterialRow]:
            return await self.get_by_project(project_id)

        return LiveQuery(self._db.tracker, ["materials"], _fetch)

    async def get_by_project(self, project_id: str) -> list[MaterialRow]:
        # rowid breaks createdAt ties in insertion order.
        stmt = (
            select(MaterialRow)
            .where(MaterialRow.project_id == project_id)
            .order_by(MaterialRow.created_at, literal_column("materials.rowid"))
        )
        async with self._db.read("materials.get_by_project") as session:
            return list((await session.execute(stmt)).scalars().all())

    async def get_by_id(self, material_id: str) -> MaterialRow | None:
        async with self._db.read("materials.get_by_id") as session:
            return await session.get(MaterialRow, material_id)

    async def upsert(self, row: MaterialRow) -> None:
        values = row_values(row)
        stmt = insert(_materials).values(values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"],
            set_={col: v for col, v in values.items() if not col.primary_key},
        )
        async with self._db.write("materials.upsert", "materials") as session:
            await session.execute(stmt)

    async def update(self, row: MaterialRow) -> int:
        values = {col: v for col, v in row_values(row).items() if not col.primary_key}
        stmt = update(_materials).where(_materials.c.id == row.id).values(values)
        async with self._db.write("materials.update", "materials") as session:
            return (await session.execute(stmt)).rowcount

    async def delete(self, row: MaterialRow) -> int:
        stmt = delete(_materials).where(_materials.c.id == row.id)
        async with self._db.write("materials.delete", "materials") as session:
            return (await session.execute(stmt)).rowcount

    async def delete_by_project(self, project_id: str) -> int:
        stmt = delete(_materials).where(MaterialRow.project_id == project_id)
        async with self._db.write("materials.delete_by_project", "materials") as session:
            return (await session.execute(stmt)).rowcount
