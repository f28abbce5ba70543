"""
construction_tracker.api.app

FastAPI app factory for the Construction Material Tracker.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Open the shared database (running migrations) before serving, close it after.
- Translate store errors into HTTP responses.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_409_CONFLICT, HTTP_503_SERVICE_UNAVAILABLE

from construction_tracker import __version__
from construction_tracker.api.routers.health import router as health_router
from construction_tracker.api.routers.materials import router as materials_router
from construction_tracker.api.routers.projects import router as projects_router
from construction_tracker.db.database import close_database, get_database
from construction_tracker.errors import (
    ConcurrentAccessError,
    ConstraintViolationError,
    MigrationError,
)
from construction_tracker.observability.logging import configure_logging, get_logger
from construction_tracker.observability.middleware import RequestContextMiddleware
from construction_tracker.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        db = get_database(settings)
        # Fail fast: a schema that cannot be migrated must not serve requests.
        await db.open()
        app.state.settings = settings
        app.state.db = db
        try:
            yield
        finally:
            await close_database()
            log.info("shutdown")

    app = FastAPI(
        title="Construction Material Tracker",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(projects_router)
    app.include_router(materials_router)

    @app.exception_handler(ConstraintViolationError)
    async def _constraint_violation(_: Request, exc: ConstraintViolationError) -> JSONResponse:
        return JSONResponse(status_code=HTTP_409_CONFLICT, content={"detail": str(exc)})

    @app.exception_handler(ConcurrentAccessError)
    async def _concurrent_access(_: Request, exc: ConcurrentAccessError) -> JSONResponse:
        log.warning("database_busy", error=str(exc))
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE, content={"detail": "database is busy"}
        )

    @app.exception_handler(MigrationError)
    async def _migration_failed(_: Request, exc: MigrationError) -> JSONResponse:
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE, content={"detail": "database unavailable"}
        )

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; persistence rules live in repositories and DAOs.
