"""
construction_tracker.repositories.projects

Repository for `Project` domain objects.

Responsibilities:
- Live list of all projects, oldest first.
- Insert with id/timestamp assignment; update and cascading delete.
"""

from __future__ import annotations

import dataclasses

from construction_tracker.db.database import ConstructionDatabase
from construction_tracker.db.live import LiveQuery
from construction_tracker.domain.models import Project
from construction_tracker.ids import generate_id, now_ms
from construction_tracker.mappers import project_to_domain, project_to_row
from construction_tracker.observability.logging import get_logger

log = get_logger(__name__)


class ProjectRepository:
    def __init__(self, db: ConstructionDatabase) -> None:
        self._dao = db.project_dao()

    def observe_all(self) -> LiveQuery[list[Project]]:
        return self._dao.observe_all().map(lambda rows: [project_to_domain(r) for r in rows])

    async def list_all(self) -> list[Project]:
        return [project_to_domain(r) for r in await self._dao.get_all()]

    async def get_by_id(self, project_id: str) -> Project | None:
        row = await self._dao.get_by_id(project_id)
        return project_to_domain(row) if row is not None else None

    async def insert(self, project: Project) -> str:
        """Persist `project`, assigning an id and creation time if missing. Returns the id."""

        assigned = dataclasses.replace(
            project,
            id=project.id or generate_id(),
            created_at=project.created_at if project.created_at is not None else now_ms(),
        )
        await self._dao.upsert(project_to_row(assigned))
        log.info("project_inserted", project_id=assigned.id)
        return assigned.id

    async def update(self, project: Project) -> None:
        if project.created_at is None:
            # Keep the stored creation time; updating a missing project is a no-op.
            existing = await self._dao.get_by_id(project.id)
            if existing is None:
                log.debug("project_update_skipped", project_id=project.id)
                return
            project = dataclasses.replace(project, created_at=existing.created_at)
        await self._dao.update(project_to_row(project))

    async def delete(self, project: Project) -> None:
        """Delete the project; its materials go with it in the same transaction."""

        deleted = await self._dao.delete(project_to_row(project))
        log.info("project_deleted", project_id=project.id, deleted=deleted)
