"""Task ORM — unit of work inside a project, with status and status history.

Invariants:
    - Always belongs to a Project (project_id FK)
    - status is one of TaskStatus values; starts as "pending"
    - Every status change appends a TaskStatusChange (who, what, when)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from uptask.core.domain_types import TaskStatus
from uptask.db.base import Base


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TaskStatus.PENDING.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    project: Mapped["Project"] = relationship(
        "Project", back_populates="tasks",
    )
    notes: Mapped[list["Note"]] = relationship(
        "Note", back_populates="task",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Note.created_at",
    )
    status_history: Mapped[list["TaskStatusChange"]] = relationship(
        "TaskStatusChange", back_populates="task",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="TaskStatusChange.created_at",
    )


class TaskStatusChange(Base):
    """Who moved a task to which status."""
    __tablename__ = "task_status_changes"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    task_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    task: Mapped["Task"] = relationship(
        "Task", back_populates="status_history",
    )
    user: Mapped["User"] = relationship("User", lazy="selectin")
