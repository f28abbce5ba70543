"""
construction_tracker.db

Persistence package (SQLAlchemy async over SQLite).

Responsibilities:
- Declare the on-disk schema and its migrations.
- Provide the entity stores (DAOs) and live query plumbing.
- Own the single process-wide database instance.
"""

# Package marker.
