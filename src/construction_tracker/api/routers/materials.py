"""
construction_tracker.api.routers.materials

Material endpoints.

Responsibilities:
- List, add and clear the materials of a project.
- Read, update and delete a single material.

Quantity and price are accepted as free text; only their length is limited.
"""

from __future__ import annotations

import dataclasses

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT, HTTP_404_NOT_FOUND

from construction_tracker.api.deps import material_repo, project_repo
from construction_tracker.domain.models import DEFAULT_UNIT, Material
from construction_tracker.repositories import MaterialRepository, ProjectRepository

router = APIRouter(prefix="/v1", tags=["materials"])


class MaterialFields(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    quantity: str = Field(min_length=1, max_length=8)
    unit: str = Field(default=DEFAULT_UNIT, min_length=1, max_length=16)
    price: str = Field(min_length=1, max_length=10)
    description: str = Field(default="", max_length=500)
    is_purchased: bool = False


class MaterialCreateRequest(MaterialFields):
    id: str = Field(default="", max_length=64)


class MaterialResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    quantity: str
    unit: str
    price: str
    description: str
    is_purchased: bool
    created_at: int


class CreatedResponse(BaseModel):
    id: str


class DeletedResponse(BaseModel):
    deleted: int


async def _require_material(materials: MaterialRepository, material_id: str) -> Material:
    material = await materials.get_by_id(material_id)
    if material is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Material not found")
    return material


@router.get("/projects/{project_id}/materials", response_model=list[MaterialResponse])
async def list_materials(
    project_id: str,
    projects: ProjectRepository = Depends(project_repo),
    materials: MaterialRepository = Depends(material_repo),
) -> list[MaterialResponse]:
    if await projects.get_by_id(project_id) is None:
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Project not found")
    items = await materials.list_by_project(project_id)
    return [MaterialResponse.model_validate(m) for m in items]


@router.post(
    "/projects/{project_id}/materials",
    response_model=CreatedResponse,
    status_code=HTTP_201_CREATED,
)
async def add_material(
    project_id: str,
    body: MaterialCreateRequest,
    materials: MaterialRepository = Depends(material_repo),
) -> CreatedResponse:
    # An unknown project surfaces as a foreign-key violation (409) from the store.
    material_id = await materials.insert(Material(**body.model_dump()), project_id)
    return CreatedResponse(id=material_id)


@router.delete("/projects/{project_id}/materials", response_model=DeletedResponse)
async def clear_materials(
    project_id: str,
    materials: MaterialRepository = Depends(material_repo),
) -> DeletedResponse:
    return DeletedResponse(deleted=await materials.delete_by_project(project_id))


@router.get("/materials/{material_id}", response_model=MaterialResponse)
async def get_material(
    material_id: str,
    materials: MaterialRepository = Depends(material_repo),
) -> MaterialResponse:
    return MaterialResponse.model_validate(await _require_material(materials, material_id))


@router.put("/materials/{material_id}", response_model=MaterialResponse)
async def update_material(
    material_id: str,
    body: MaterialFields,
    materials: MaterialRepository = Depends(material_repo),
) -> MaterialResponse:
    current = await _require_material(materials, material_id)
    updated = dataclasses.replace(current, **body.model_dump())
    await materials.update(updated)
    return MaterialResponse.model_validate(updated)


@router.delete("/materials/{material_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_material(
    material_id: str,
    materials: MaterialRepository = Depends(material_repo),
) -> Response:
    await materials.delete(await _require_material(materials, material_id))
    return Response(status_code=HTTP_204_NO_CONTENT)
