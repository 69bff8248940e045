"""API Layer — FastAPI routes, request guards and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Mutations answer with plain-text messages, reads with JSON
"""
