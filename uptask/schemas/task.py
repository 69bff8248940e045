"""Task Schemas — task payloads, status change and read models.

Invariants:
    - status only accepts TaskStatus wire values
    - Detail view carries notes and status history in creation order
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from uptask.core.domain_types import TaskStatus
from uptask.schemas.auth import UserSummary
from uptask.schemas.note import NoteResponse


class TaskWrite(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=10_000)

    @field_validator("name", "description")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty or whitespace")
        return v


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    name: str
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime


class StatusChangeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user: UserSummary
    status: TaskStatus
    created_at: datetime


class TaskDetailResponse(TaskResponse):
    notes: list[NoteResponse]
    status_history: list[StatusChangeResponse]
