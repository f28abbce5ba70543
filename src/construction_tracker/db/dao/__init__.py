"""
construction_tracker.db.dao

Entity stores: typed CRUD and live queries against the two tables.
"""

from construction_tracker.db.dao.materials import MaterialDao
from construction_tracker.db.dao.projects import ProjectDao

__all__ = ["MaterialDao", "ProjectDao"]


# --- Module Notes -----------------------------------------------------------
# DAOs never invent ids, timestamps or column defaults; the repositories
# hand them fully populated rows.
