"""
construction_tracker.api

HTTP consumer of the persistence layer.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring and request/response models.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers only talk to repositories; storage rows never reach a response.
