"""
construction_tracker.domain

Domain value objects handed to consumers. Storage rows never leave the
persistence layer.
"""

from construction_tracker.domain.models import Material, Project

__all__ = ["Material", "Project"]
