"""Project Routes — list, create, read, update and delete projects.

Invariants:
    - The creator of a project becomes its manager
    - Listing returns only projects the caller manages or belongs to
    - Update and delete go through require_manager; read through get_project
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from uptask.api.deps import get_current_user, get_project, require_manager
from uptask.infrastructure.database import get_db
from uptask.models.project import Project
from uptask.models.user import User
from uptask.schemas.project import (
    ProjectDetailResponse, ProjectResponse, ProjectWrite,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.get("", response_model=list[ProjectResponse])
@router.get("/", response_model=list[ProjectResponse], include_in_schema=False)
async def list_projects(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Projects the caller manages or is a team member of."""
    result = await db.execute(
        select(Project)
        .where(or_(
            Project.manager_id == user.id,
            Project.team.any(User.id == user.id),
        ))
        .order_by(Project.created_at.desc()),
    )
    return result.scalars().all()


@router.post(
    "", response_class=PlainTextResponse,
    status_code=status.HTTP_201_CREATED,
)
@router.post(
    "/", response_class=PlainTextResponse,
    status_code=status.HTTP_201_CREATED, include_in_schema=False,
)
async def create_project(
    body: ProjectWrite,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    project = Project(
        project_name=body.project_name,
        client_name=body.client_name,
        description=body.description,
        manager_id=user.id,
        team=[],
        tasks=[],
    )
    db.add(project)
    await db.commit()
    logger.info(
        "Project created",
        extra={"user_id": user.id, "project_id": project.id},
    )
    return "Project created successfully"


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project_by_id(project: Project = Depends(get_project)):
    return project


@router.put("/{project_id}", response_class=PlainTextResponse)
async def update_project(
    body: ProjectWrite,
    project: Project = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    project.project_name = body.project_name
    project.client_name = body.client_name
    project.description = body.description
    await db.commit()
    return "Project updated"


@router.delete("/{project_id}", response_class=PlainTextResponse)
async def delete_project(
    project: Project = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    """Delete the project together with its tasks and their notes."""
    await db.delete(project)
    await db.commit()
    logger.info("Project deleted", extra={"project_id": project.id})
    return "Project deleted"
