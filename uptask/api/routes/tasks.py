"""Task Routes — task CRUD within a project plus status changes.

Invariants:
    - Every task route is scoped to /projects/{project_id}; tasks of other projects are 404
    - Create, update and delete are manager-only
    - Status changes are open to the manager and team members and are recorded in history
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from uptask.api.deps import (
    get_current_user, get_managed_task, get_project, get_task, require_manager,
)
from uptask.core.domain_types import TaskStatus
from uptask.infrastructure.database import get_db
from uptask.models.project import Project
from uptask.models.task import Task, TaskStatusChange
from uptask.models.user import User
from uptask.schemas.task import (
    TaskDetailResponse, TaskResponse, TaskStatusUpdate, TaskWrite,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/projects", tags=["tasks"])


@router.post(
    "/{project_id}/tasks", response_class=PlainTextResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskWrite,
    project: Project = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    task = Task(
        name=body.name,
        description=body.description,
        status=TaskStatus.PENDING.value,
        notes=[],
        status_history=[],
    )
    project.tasks.append(task)
    await db.commit()
    logger.info(
        "Task created",
        extra={"project_id": project.id, "task_id": task.id},
    )
    return "Task created successfully"


@router.get("/{project_id}/tasks", response_model=list[TaskResponse])
async def list_tasks(project: Project = Depends(get_project)):
    return project.tasks


@router.get("/{project_id}/tasks/{task_id}", response_model=TaskDetailResponse)
async def get_task_by_id(task: Task = Depends(get_task)):
    return task


@router.put("/{project_id}/tasks/{task_id}", response_class=PlainTextResponse)
async def update_task(
    body: TaskWrite,
    task: Task = Depends(get_managed_task),
    db: AsyncSession = Depends(get_db),
):
    task.name = body.name
    task.description = body.description
    await db.commit()
    return "Task updated successfully"


@router.delete("/{project_id}/tasks/{task_id}", response_class=PlainTextResponse)
async def delete_task(
    task: Task = Depends(get_managed_task),
    project: Project = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    project.tasks.remove(task)
    await db.commit()
    return "Task deleted successfully"


@router.post(
    "/{project_id}/tasks/{task_id}/status", response_class=PlainTextResponse,
)
async def update_task_status(
    body: TaskStatusUpdate,
    task: Task = Depends(get_task),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    task.status = body.status.value
    task.status_history.append(
        TaskStatusChange(user_id=user.id, status=body.status.value),
    )
    await db.commit()
    logger.info(
        f"Task moved to {body.status.value}",
        extra={"user_id": user.id, "task_id": task.id},
    )
    return "Task status updated"
