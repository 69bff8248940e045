"""Request Guards — FastAPI dependencies for identity and project/task scoping.

Invariants:
    - get_current_user resolves a Bearer JWT to a confirmed User or raises 401
    - get_project resolves {project_id} and enforces manager-or-member read access
    - require_manager narrows get_project to the project manager
    - get_task resolves {task_id} only within the resolved project (404 otherwise)

Design Decisions:
    - Guards raise UpTaskError subclasses; the global handler renders them
    - All guards share the request's AsyncSession through FastAPI dependency caching
"""

import logging
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from uptask.core.authorization import can_manage_project, can_read_project
from uptask.core.errors import (
    AuthenticationError, ErrorContext, NotAuthorizedError, ResourceNotFoundError,
)
from uptask.infrastructure.database import get_db
from uptask.infrastructure.security import decode_access_token
from uptask.models.project import Project
from uptask.models.task import Task
from uptask.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")
    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise AuthenticationError("Invalid token")
    user = await db.get(User, user_id)
    if user is None:
        raise AuthenticationError("Invalid token")
    if not user.confirmed:
        raise AuthenticationError("Account not confirmed")
    return user


async def get_project(
    project_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Project:
    project = await db.get(Project, project_id)
    if project is None:
        raise ResourceNotFoundError("Project not found")
    if not can_read_project(project, user.id):
        raise NotAuthorizedError(
            "You are not part of this project",
            ErrorContext(user_id=str(user.id), project_id=str(project_id)),
        )
    return project


async def require_manager(
    project: Project = Depends(get_project),
    user: User = Depends(get_current_user),
) -> Project:
    if not can_manage_project(project, user.id):
        raise NotAuthorizedError(
            "Only the project manager can perform this action",
            ErrorContext(user_id=str(user.id), project_id=str(project.id)),
        )
    return project


async def _task_in_project(task_id: UUID, project: Project, db: AsyncSession) -> Task:
    result = await db.execute(
        select(Task).where(Task.id == task_id, Task.project_id == project.id),
    )
    task = result.scalar_one_or_none()
    if task is None:
        raise ResourceNotFoundError("Task not found")
    return task


async def get_task(
    task_id: UUID,
    project: Project = Depends(get_project),
    db: AsyncSession = Depends(get_db),
) -> Task:
    return await _task_in_project(task_id, project, db)


async def get_managed_task(
    task_id: UUID,
    project: Project = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
) -> Task:
    return await _task_in_project(task_id, project, db)
