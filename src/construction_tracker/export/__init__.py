"""
construction_tracker.export

Report consumers that read a project's materials and write an artifact.
"""
