"""
construction_tracker.db.models

Storage rows for the two persisted tables.

Responsibilities:
- Declare the current (version 2) shape of `projects` and `materials`.
- Keep column names identical to the on-disk layout shared with older builds.

Rows are plain storage records: they carry no defaults of their own beyond the
server-side column defaults needed for legacy data. Identifiers and creation
timestamps are always supplied by the caller.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Boolean, Column, ForeignKey, String, Text, inspect, text
from sqlalchemy.orm import Mapped, mapped_column

from construction_tracker.db.base import Base
from construction_tracker.domain.models import DEFAULT_UNIT


class ProjectRow(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_uri: Mapped[str | None] = mapped_column("imageUri", Text, nullable=True)
    # Milliseconds since the Unix epoch.
    created_at: Mapped[int] = mapped_column("createdAt", nullable=False)

    def __repr__(self) -> str:
        return f"ProjectRow(id={self.id!r}, name={self.name!r})"


class MaterialRow(Base):
    __tablename__ = "materials"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        "projectId",
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    # Free-form on purpose ("3 bags", "1.5"); never parsed at this layer.
    quantity: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    is_purchased: Mapped[bool] = mapped_column(
        "isPurchased", Boolean, nullable=False, server_default=text("0")
    )
    created_at: Mapped[int] = mapped_column("createdAt", nullable=False)
    # Added in schema version 2.
    unit: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=text(f"'{DEFAULT_UNIT}'")
    )

    def __repr__(self) -> str:
        return f"MaterialRow(id={self.id!r}, project_id={self.project_id!r}, name={self.name!r})"


def row_values(row: Base) -> dict[Column[Any], Any]:
    """Column-keyed values of a row, for Core INSERT/UPDATE statements."""

    return {
        prop.columns[0]: getattr(row, prop.key) for prop in inspect(type(row)).column_attrs
    }


# --- Module Notes -----------------------------------------------------------
# Any change to these declarations needs a matching step in `db.migrations`
# and a bump of `SCHEMA_VERSION`.
