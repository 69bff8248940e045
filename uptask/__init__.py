"""UpTask Application Package — project-management REST backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
