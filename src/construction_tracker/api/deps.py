"""
construction_tracker.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, the shared database and repositories.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Depends, Request

from construction_tracker.db.database import ConstructionDatabase
from construction_tracker.repositories import MaterialRepository, ProjectRepository
from construction_tracker.settings import Settings


def settings_dep(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def database_dep(request: Request) -> ConstructionDatabase:
    # Opened during app startup in `construction_tracker.api.app.create_app`.
    return request.app.state.db  # type: ignore[attr-defined]


def project_repo(db: ConstructionDatabase = Depends(database_dep)) -> ProjectRepository:
    return ProjectRepository(db)


def material_repo(db: ConstructionDatabase = Depends(database_dep)) -> MaterialRepository:
    return MaterialRepository(db)


# --- Module Notes -----------------------------------------------------------
# Repositories are cheap wrappers around the shared DAOs, so one per request is fine.
