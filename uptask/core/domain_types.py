"""Domain Types — enums that replace bare string values across the codebase.

Invariants:
    - Task status values are encoded as an Enum, never matched as raw strings
    - TaskStatus wire values are camelCase (what clients send and receive)
"""

from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task workflow states, stored in the `status` column."""
    PENDING = "pending"
    ON_HOLD = "onHold"
    IN_PROGRESS = "inProgress"
    UNDER_REVIEW = "underReview"
    COMPLETED = "completed"
