"""Project ORM — aggregate root owning tasks; references a manager and a team.

Invariants:
    - manager_id is the creator and never appears in team
    - team holds each user at most once (composite PK on project_team)
    - Deleting a project cascades to its tasks (and through them, notes)

Design Decisions:
    - Team as a many-to-many association table instead of an id array column:
      membership queries stay portable between PostgreSQL and SQLite
    - selectin loading everywhere: async sessions cannot lazy-load on attribute access
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from uptask.db.base import Base

project_team = Table(
    "project_team",
    Base.metadata,
    Column(
        "project_id", UUID(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "user_id", UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    ),
)


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    project_name: Mapped[str] = mapped_column(String(200), nullable=False)
    client_name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    manager_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False,
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

    # Relationships
    team: Mapped[list["User"]] = relationship(
        "User", secondary=project_team, lazy="selectin",
    )
    tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="project",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Task.created_at",
    )

    @property
    def team_ids(self) -> list[uuid.UUID]:
        return [member.id for member in self.team]
