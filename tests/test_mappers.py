"""
tests.test_mappers

Row <-> domain conversion and timestamp-based id generation.
"""

from __future__ import annotations

from construction_tracker.db.models import MaterialRow, ProjectRow
from construction_tracker.domain.models import Material, Project
from construction_tracker.ids import generate_id
from construction_tracker.mappers import (
    material_to_domain,
    material_to_row,
    project_to_domain,
    project_to_row,
)


def test_material_round_trip_keeps_every_field() -> None:
    m = Material(
        id="m-42",
        name="Rebar",
        quantity="3 bundles",
        unit="m",
        price="12,50",
        description="12mm",
        is_purchased=True,
        created_at=1_700_000_000_000,
    )
    row = material_to_row(m, "p1")

    assert row.project_id == "p1"
    assert material_to_domain(row) == m


def test_material_without_id_gets_one_during_conversion() -> None:
    m = Material(name="Sand", quantity="1", price="5", created_at=10)
    row = material_to_row(m, "p1")

    assert row.id
    assert row.id.isdigit()
    # Everything except the id survives.
    assert material_to_domain(row) == Material(
        id=row.id, name="Sand", quantity="1", price="5", created_at=10
    )
    # Input is not mutated.
    assert m.id == ""


def test_project_round_trip() -> None:
    p = Project(id="p1", name="Garage", description="", image_uri="file:///x.png", created_at=5)
    assert project_to_domain(project_to_row(p)) == p


def test_rows_map_to_domain_defaults() -> None:
    row = MaterialRow(
        id="m1",
        project_id="p1",
        name="Nails",
        quantity="200",
        price="4",
        description="",
        is_purchased=False,
        created_at=1,
        unit="pcs",
    )
    assert material_to_domain(row).unit == "pcs"
    assert project_to_domain(
        ProjectRow(id="p", name="n", description="d", image_uri=None, created_at=1)
    ).image_uri is None


def test_generated_ids_are_unique_and_increasing() -> None:
    ids = [int(generate_id()) for _ in range(500)]
    assert len(set(ids)) == len(ids)
    assert ids == sorted(ids)
