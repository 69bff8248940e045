"""Project Access Rules — tests for the pure manager/member predicates.

Tests cover:
    - manager and team members can read; outsiders cannot
    - only the manager can manage
    - check_new_member rejects existing members and the manager
    - check_existing_member rejects non-members
    - only the author can delete a note
"""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from uptask.core.authorization import (
    can_delete_note,
    can_manage_project,
    can_read_project,
    check_existing_member,
    check_new_member,
    is_manager,
    is_team_member,
)


@dataclass
class _Project:
    manager_id: UUID
    team_ids: list[UUID] = field(default_factory=list)


@dataclass
class _Note:
    created_by_id: UUID


MANAGER = uuid4()
MEMBER = uuid4()
OUTSIDER = uuid4()


def _project() -> _Project:
    return _Project(manager_id=MANAGER, team_ids=[MEMBER])


# ─── predicates ──────────────────────────────────────────────────

def test_is_manager_is_identity_check():
    assert is_manager(_project(), MANAGER)
    assert not is_manager(_project(), MEMBER)


def test_is_team_member_is_containment_check():
    assert is_team_member(_project(), MEMBER)
    assert not is_team_member(_project(), MANAGER)
    assert not is_team_member(_project(), OUTSIDER)


def test_manager_and_members_can_read():
    project = _project()
    assert can_read_project(project, MANAGER)
    assert can_read_project(project, MEMBER)
    assert not can_read_project(project, OUTSIDER)


def test_only_manager_can_manage():
    project = _project()
    assert can_manage_project(project, MANAGER)
    assert not can_manage_project(project, MEMBER)
    assert not can_manage_project(project, OUTSIDER)


# ─── membership checks ───────────────────────────────────────────

def test_check_new_member_accepts_outsider():
    assert check_new_member(_project(), OUTSIDER) is None


def test_check_new_member_rejects_existing_member():
    error = check_new_member(_project(), MEMBER)
    assert error is not None
    assert error.http_status == 409
    assert error.code == "ALREADY_TEAM_MEMBER"


def test_check_new_member_rejects_manager():
    error = check_new_member(_project(), MANAGER)
    assert error is not None
    assert error.http_status == 409
    assert error.code == "MANAGER_NOT_ALLOWED"


def test_check_existing_member():
    assert check_existing_member(_project(), MEMBER) is None
    error = check_existing_member(_project(), OUTSIDER)
    assert error is not None
    assert error.code == "NOT_TEAM_MEMBER"


def test_only_author_can_delete_note():
    author = uuid4()
    note = _Note(created_by_id=author)
    assert can_delete_note(note, author)
    assert not can_delete_note(note, MANAGER)
