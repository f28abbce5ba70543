"""
construction_tracker.export.result

Outcome of an export: either the written artifact or an error description.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ExportSuccess:
    path: Path


@dataclass(frozen=True, slots=True)
class ExportError:
    message: str
    cause: BaseException | None = None


ExportResult = ExportSuccess | ExportError
