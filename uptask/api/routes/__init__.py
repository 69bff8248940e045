"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes hold no access rules of their own (guards live in api/deps.py)
"""
