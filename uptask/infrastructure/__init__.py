"""Infrastructure Layer — database, security primitives, mail and logging.

Invariants:
    - Infrastructure never imports from api/ or services/
    - All driver-level failures mapped to UpTaskError subclasses (core/errors.py)
"""
