"""
construction_tracker.mappers

Conversion between storage rows and domain objects.

Responsibilities:
- Map `ProjectRow`/`MaterialRow` to `Project`/`Material` and back.
- Supply the project id a `Material` does not carry when building its row.
- Give a material without an id a timestamp-based one during conversion.

Pure functions: no I/O, inputs are never mutated.
"""

from __future__ import annotations

from construction_tracker.db.models import MaterialRow, ProjectRow
from construction_tracker.domain.models import Material, Project
from construction_tracker.ids import generate_id


def project_to_domain(row: ProjectRow) -> Project:
    return Project(
        id=row.id,
        name=row.name,
        description=row.description,
        image_uri=row.image_uri,
        created_at=row.created_at,
    )


def project_to_row(project: Project) -> ProjectRow:
    return ProjectRow(
        id=project.id,
        name=project.name,
        description=project.description,
        image_uri=project.image_uri,
        created_at=project.created_at,
    )


def material_to_domain(row: MaterialRow) -> Material:
    return Material(
        id=row.id,
        name=row.name,
        quantity=row.quantity,
        unit=row.unit,
        price=row.price,
        description=row.description,
        is_purchased=row.is_purchased,
        created_at=row.created_at,
    )


def material_to_row(material: Material, project_id: str) -> MaterialRow:
    return MaterialRow(
        id=material.id or generate_id(),
        project_id=project_id,
        name=material.name,
        quantity=material.quantity,
        unit=material.unit,
        price=material.price,
        description=material.description,
        is_purchased=material.is_purchased,
        created_at=material.created_at,
    )


# --- Module Notes -----------------------------------------------------------
# Rows built here are transient (never added to a session); the DAOs turn them
# into Core statements.
