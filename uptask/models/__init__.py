"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Project is the aggregate root for tasks, notes and status history

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from uptask.models.user import User  # noqa: F401
from uptask.models.token import Token  # noqa: F401
from uptask.models.project import Project, project_team  # noqa: F401
from uptask.models.task import Task, TaskStatusChange  # noqa: F401
from uptask.models.note import Note  # noqa: F401
