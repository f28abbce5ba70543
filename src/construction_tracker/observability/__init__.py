"""
construction_tracker.observability

Logging and request-context helpers.
"""
