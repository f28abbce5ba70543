"""
construction_tracker.export.csv_report

CSV materials report for a single project.

Responsibilities:
- Write one row per material (purchase status, name, quantity, unit, price,
  description) followed by an estimated total.
- Report the outcome as an `ExportResult` instead of raising.
- Snapshot a stored project through the repositories (`export_project_report`).
"""

from __future__ import annotations

import csv
import re
from collections.abc import Sequence
from pathlib import Path

from construction_tracker.domain.models import Material, Project
from construction_tracker.domain.units import MaterialUnit
from construction_tracker.export.result import ExportError, ExportResult, ExportSuccess
from construction_tracker.observability.logging import get_logger
from construction_tracker.repositories import MaterialRepository, ProjectRepository

log = get_logger(__name__)

HEADERS: list[str] = ["Status", "Material", "Quantity", "Unit", "Price", "Description"]

CHECKED = "☑"
UNCHECKED = "☐"
EMPTY_DESCRIPTION = "-"


def _to_float(value: str) -> float | None:
    try:
        return float(value.strip())
    except ValueError:
        return None


def _to_int(value: str) -> int | None:
    try:
        return int(value.strip())
    except ValueError:
        return None


def unit_label(unit: str) -> str:
    """Display name for a known unit code; anything else is shown as stored."""

    known = MaterialUnit.from_short_name(unit)
    return known.display_name if known.short_name == unit else unit


def format_price(price: str) -> str:
    parsed = _to_float(price)
    return f"${parsed if parsed is not None else 0.0:.2f}"


def total_cost(materials: Sequence[Material]) -> float:
    """
    Sum of price x quantity. Only whole-number quantities count; anything that
    does not parse contributes 0.
    """

    total = 0.0
    for m in materials:
        price = _to_float(m.price) or 0.0
        quantity = _to_int(m.quantity) or 0
        total += price * quantity
    return total


def report_filename(project: Project) -> str:
    slug = re.sub(r"[^A-Za-z0-9_-]+", "_", project.name).strip("_") or "project"
    return f"{slug}_{project.id}_materials.csv"


def export_materials_csv(
    project: Project, materials: Sequence[Material], out_dir: str | Path
) -> ExportResult:
    out_path = Path(out_dir) / report_filename(project)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with out_path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(HEADERS)
            for m in materials:
                writer.writerow(
                    [
                        CHECKED if m.is_purchased else UNCHECKED,
                        m.name,
                        m.quantity,
                        unit_label(m.unit),
                        format_price(m.price),
                        m.description.strip() or EMPTY_DESCRIPTION,
                    ]
                )
            writer.writerow([])
            writer.writerow(["Total", "", "", "", f"${total_cost(materials):.2f}", ""])
    except OSError as exc:
        log.warning("export_failed", project_id=project.id, path=str(out_path), error=str(exc))
        return ExportError(message=f"could not write {out_path.name}: {exc.strerror}", cause=exc)

    log.info("export_written", project_id=project.id, path=str(out_path), rows=len(materials))
    return ExportSuccess(path=out_path)


async def export_project_report(
    project_id: str,
    *,
    projects: ProjectRepository,
    materials: MaterialRepository,
    out_dir: str | Path,
) -> ExportResult:
    """Snapshot a project and its materials through the repositories, then write the CSV."""

    project = await projects.get_by_id(project_id)
    if project is None:
        return ExportError(message=f"project {project_id} not found")
    items = await materials.list_by_project(project_id)
    return export_materials_csv(project, items, out_dir)


# --- Module Notes -----------------------------------------------------------
# Reads go through one-shot repository calls; the export never holds a live
# query open while writing.
