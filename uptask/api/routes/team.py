"""Team Routes — list, look up, add and remove project team members.

Invariants:
    - Listing the team is open to the manager and team members
    - Lookup, add and remove are manager-only
    - A user is added at most once and the manager is never added (409)
    - Removing a user who is not in the team is a 409
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from uptask.api.deps import get_project, require_manager
from uptask.core.authorization import check_existing_member, check_new_member
from uptask.core.errors import ResourceNotFoundError
from uptask.infrastructure.database import get_db
from uptask.models.project import Project
from uptask.models.user import User
from uptask.schemas.auth import UserSummary
from uptask.schemas.team import MemberAdd, MemberLookup

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/projects", tags=["team"])


@router.get("/{project_id}/team", response_model=list[UserSummary])
async def get_project_team(project: Project = Depends(get_project)):
    return project.team


@router.post("/{project_id}/team/find", response_model=UserSummary)
async def find_member_by_email(
    body: MemberLookup,
    project: Project = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(User).where(User.email == body.email))
    user = result.scalar_one_or_none()
    if user is None:
        raise ResourceNotFoundError("User not found")
    return user


@router.post("/{project_id}/team", response_class=PlainTextResponse)
async def add_member(
    body: MemberAdd,
    project: Project = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    user = await db.get(User, body.id)
    if user is None:
        raise ResourceNotFoundError("User not found")
    error = check_new_member(project, user.id)
    if error:
        raise error
    project.team.append(user)
    await db.commit()
    logger.info(
        "Team member added",
        extra={"project_id": project.id, "user_id": user.id},
    )
    return "User added successfully"


@router.delete("/{project_id}/team/{user_id}", response_class=PlainTextResponse)
async def remove_member(
    user_id: UUID,
    project: Project = Depends(require_manager),
    db: AsyncSession = Depends(get_db),
):
    error = check_existing_member(project, user_id)
    if error:
        raise error
    project.team = [member for member in project.team if member.id != user_id]
    await db.commit()
    logger.info(
        "Team member removed",
        extra={"project_id": project.id, "user_id": user_id},
    )
    return "User removed successfully"
