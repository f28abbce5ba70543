"""
construction_tracker.repositories

Domain-facing repositories over the entity stores.

Responsibilities:
- Expose projects and materials as domain objects and live sequences.
- Own entity lifecycle decisions: id assignment and creation timestamps.
"""

from construction_tracker.repositories.materials import MaterialRepository
from construction_tracker.repositories.projects import ProjectRepository

__all__ = ["MaterialRepository", "ProjectRepository"]


# --- Module Notes -----------------------------------------------------------
# Store errors (see `construction_tracker.errors`) pass through unchanged.
