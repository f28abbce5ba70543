"""
construction_tracker.repositories.materials

Repository for `Material` domain objects.

Responsibilities:
- Live list of a project's materials in creation order.
- Insert with id/timestamp assignment under a given project.
- Update/delete by id, recovering the owning project from storage.
"""

from __future__ import annotations

import dataclasses

from construction_tracker.db.database import ConstructionDatabase
from construction_tracker.db.live import LiveQuery
from construction_tracker.domain.models import Material
from construction_tracker.ids import now_ms
from construction_tracker.mappers import material_to_domain, material_to_row
from construction_tracker.observability.logging import get_logger

log = get_logger(__name__)


class MaterialRepository:
    def __init__(self, db: ConstructionDatabase) -> None:
        self._dao = db.material_dao()

    def observe_by_project(self, project_id: str) -> LiveQuery[list[Material]]:
        return self._dao.observe_by_project(project_id).map(
            lambda rows: [material_to_domain(r) for r in rows]
        )

    async def list_by_project(self, project_id: str) -> list[Material]:
        return [material_to_domain(r) for r in await self._dao.get_by_project(project_id)]

    async def get_by_id(self, material_id: str) -> Material | None:
        row = await self._dao.get_by_id(material_id)
        return material_to_domain(row) if row is not None else None

    async def insert(self, material: Material, project_id: str) -> str:
        """
        Persist `material` under `project_id` and return its id. An empty id is
        filled from the clock by the mapper; an existing id is overwritten
        (last write wins). Raises `ConstraintViolationError` for an unknown project.
        """

        if material.created_at is None:
            material = dataclasses.replace(material, created_at=now_ms())
        row = material_to_row(material, project_id)
        await self._dao.upsert(row)
        log.info("material_inserted", material_id=row.id, project_id=project_id)
        return row.id

    async def update(self, material: Material) -> None:
        existing = await self._dao.get_by_id(material.id)
        if existing is None:
            log.debug("material_update_skipped", material_id=material.id)
            return
        if material.created_at is None:
            material = dataclasses.replace(material, created_at=existing.created_at)
        await self._dao.update(material_to_row(material, existing.project_id))

    async def delete(self, material: Material) -> None:
        existing = await self._dao.get_by_id(material.id)
        if existing is None:
            return
        await self._dao.delete(existing)
        log.info("material_deleted", material_id=material.id)

    async def delete_by_project(self, project_id: str) -> int:
        deleted = await self._dao.delete_by_project(project_id)
        log.info("materials_cleared", project_id=project_id, deleted=deleted)
        return deleted
