"""
construction_tracker.db.base

SQLAlchemy declarative base.

Responsibilities:
- Provide a shared DeclarativeBase for all row models.
"""

from __future__ import annotations

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    # Stable constraint names keep ALTER-based migrations predictable on SQLite.
    metadata = MetaData(
        naming_convention={
            "ix": "ix_%(column_0_label)s",
            "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
            "pk": "pk_%(table_name)s",
        }
    )


# --- Module Notes -----------------------------------------------------------
# All row models inherit from `Base`; `migrations.migrate` builds fresh
# databases straight from `Base.metadata`.
