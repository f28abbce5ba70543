"""
construction_tracker.api.routers

Route modules, one per resource.
"""
