"""Note Routes — list, add and delete notes on a task.

Invariants:
    - Anyone who can read the project may list and add notes
    - Only the author of a note may delete it (403 otherwise)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from uptask.api.deps import get_current_user, get_task
from uptask.core.authorization import can_delete_note
from uptask.core.errors import ErrorContext, NotAuthorizedError, ResourceNotFoundError
from uptask.infrastructure.database import get_db
from uptask.models.note import Note
from uptask.models.task import Task
from uptask.models.user import User
from uptask.schemas.note import NoteCreate, NoteResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/projects", tags=["notes"])


@router.post(
    "/{project_id}/tasks/{task_id}/notes", response_class=PlainTextResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_note(
    body: NoteCreate,
    task: Task = Depends(get_task),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    task.notes.append(Note(content=body.content, created_by_id=user.id))
    await db.commit()
    return "Note created"


@router.get(
    "/{project_id}/tasks/{task_id}/notes", response_model=list[NoteResponse],
)
async def get_task_notes(task: Task = Depends(get_task)):
    return task.notes


@router.delete(
    "/{project_id}/tasks/{task_id}/notes/{note_id}",
    response_class=PlainTextResponse,
)
async def delete_note(
    note_id: UUID,
    task: Task = Depends(get_task),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Note).where(Note.id == note_id, Note.task_id == task.id),
    )
    note = result.scalar_one_or_none()
    if note is None:
        raise ResourceNotFoundError("Note not found")
    if not can_delete_note(note, user.id):
        raise NotAuthorizedError(
            "Only the author can delete this note",
            ErrorContext(user_id=str(user.id), task_id=str(task.id)),
        )
    task.notes.remove(note)
    await db.commit()
    return "Note deleted"
