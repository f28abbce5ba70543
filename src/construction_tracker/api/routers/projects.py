"""
construction_tracker.api.routers.projects

Project endpoints.

Responsibilities:
- List, create, read, update and delete projects.
- Trigger the CSV materials export for a project.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_204_NO_CONTENT,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from construction_tracker.api.deps import material_repo, project_repo, settings_dep
from construction_tracker.domain.models import Project
from construction_tracker.export.csv_report import export_project_report
from construction_tracker.export.result import ExportError
from construction_tracker.repositories import MaterialRepository, ProjectRepository
from construction_tracker.settings import Settings

router = APIRouter(prefix="/v1/projects", tags=["projects"])


class ProjectCreateRequest(BaseModel):
    id: str = Field(default="", max_length=64)
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    image_uri: str | None = None


class ProjectUpdateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    image_uri: str | None = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    image_uri: str | None
    created_at: int


class CreatedResponse(BaseModel):
    id: str


class ExportResponse(BaseModel):
    path: str


async def _require_project(projects: ProjectRepository, project_id: str) -> Project:
    project = await projects.get_by_id(project_id)
    if project is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Project not found")
    return project


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    projects: ProjectRepository = Depends(project_repo),
) -> list[ProjectResponse]:
    return [ProjectResponse.model_validate(p) for p in await projects.list_all()]


@router.post("", response_model=CreatedResponse, status_code=HTTP_201_CREATED)
async def create_project(
    body: ProjectCreateRequest,
    projects: ProjectRepository = Depends(project_repo),
) -> CreatedResponse:
    project_id = await projects.insert(
        Project(
            id=body.id,
            name=body.name,
            description=body.description,
            image_uri=body.image_uri,
        )
    )
    return CreatedResponse(id=project_id)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    projects: ProjectRepository = Depends(project_repo),
) -> ProjectResponse:
    return ProjectResponse.model_validate(await _require_project(projects, project_id))


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    body: ProjectUpdateRequest,
    projects: ProjectRepository = Depends(project_repo),
) -> ProjectResponse:
    current = await _require_project(projects, project_id)
    updated = dataclasses.replace(
        current, name=body.name, description=body.description, image_uri=body.image_uri
    )
    await projects.update(updated)
    return ProjectResponse.model_validate(updated)


@router.delete("/{project_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    projects: ProjectRepository = Depends(project_repo),
) -> Response:
    project = await _require_project(projects, project_id)
    await projects.delete(project)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.post("/{project_id}/export", response_model=ExportResponse)
async def export_project(
    project_id: str,
    projects: ProjectRepository = Depends(project_repo),
    materials: MaterialRepository = Depends(material_repo),
    settings: Settings = Depends(settings_dep),
) -> ExportResponse:
    await _require_project(projects, project_id)
    result = await export_project_report(
        project_id,
        projects=projects,
        materials=materials,
        out_dir=Path(settings.export_dir),
    )
    if isinstance(result, ExportError):
        raise HTTPException(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=result.message)
    return ExportResponse(path=str(result.path))
