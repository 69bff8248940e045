"""Project Access Rules — manager-only writes, manager-or-member reads.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Predicates return bool; membership checks return an error on violation, None on success
    - The manager is never part of the team of their own project

Design Decisions:
    - Protocol types instead of ORM imports: the rules run against any object with
      manager_id / team_ids, so tests build plain stand-ins
    - Checks return errors instead of raising: the caller decides when to raise
"""

from typing import Protocol
from uuid import UUID

from uptask.core.errors import ConflictError


class ProjectLike(Protocol):
    """Structural contract for objects the access rules inspect."""
    manager_id: UUID

    @property
    def team_ids(self) -> list[UUID]: ...


class NoteLike(Protocol):
    created_by_id: UUID


def is_manager(project: ProjectLike, user_id: UUID) -> bool:
    return project.manager_id == user_id


def is_team_member(project: ProjectLike, user_id: UUID) -> bool:
    return user_id in project.team_ids


def can_read_project(project: ProjectLike, user_id: UUID) -> bool:
    """Manager and team members see the project, its tasks, team and notes."""
    return is_manager(project, user_id) or is_team_member(project, user_id)


def can_manage_project(project: ProjectLike, user_id: UUID) -> bool:
    """Only the manager edits the project, its tasks and its team."""
    return is_manager(project, user_id)


def can_delete_note(note: NoteLike, user_id: UUID) -> bool:
    return note.created_by_id == user_id


def check_new_member(project: ProjectLike, user_id: UUID) -> ConflictError | None:
    """A user joins a team at most once, and never the team they manage."""
    if is_team_member(project, user_id):
        return ConflictError(
            "User is already a member of this project",
            code="ALREADY_TEAM_MEMBER",
        )
    if is_manager(project, user_id):
        return ConflictError(
            "The project manager cannot be added to the team",
            code="MANAGER_NOT_ALLOWED",
        )
    return None


def check_existing_member(project: ProjectLike, user_id: UUID) -> ConflictError | None:
    if not is_team_member(project, user_id):
        return ConflictError(
            "User is not a member of this project",
            code="NOT_TEAM_MEMBER",
        )
    return None
