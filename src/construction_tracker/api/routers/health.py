"""
construction_tracker.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) reporting the open schema version.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import text

from construction_tracker.api.deps import database_dep
from construction_tracker.db.database import ConstructionDatabase

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(db: ConstructionDatabase = Depends(database_dep)) -> dict[str, Any]:
    version = await db.open()
    async with db.read("readyz") as session:
        await session.execute(text("SELECT 1"))
    return {"status": "ready", "schema_version": version}
