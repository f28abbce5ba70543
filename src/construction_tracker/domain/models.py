"""
construction_tracker.domain.models

Domain value objects.

Responsibilities:
- Describe projects and materials the way consumers see them.
- Stay free of storage concerns: a `Material` does not know its project id.

An empty `id` means "not yet assigned"; a `created_at` of `None` means "let the
repository stamp it". Timestamps are milliseconds since the Unix epoch.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_UNIT = "pcs"


@dataclass(frozen=True, slots=True)
class Project:
    name: str
    description: str = ""
    id: str = ""
    image_uri: str | None = None
    created_at: int | None = None


@dataclass(frozen=True, slots=True)
class Material:
    name: str
    quantity: str
    price: str
    id: str = ""
    unit: str = DEFAULT_UNIT
    description: str = ""
    is_purchased: bool = False
    created_at: int | None = None


# --- Module Notes -----------------------------------------------------------
# Quantity and price are kept as the user typed them ("3 bags", "12,50"); any
# numeric interpretation belongs to consumers such as the CSV export.
