"""Team Routes — membership exclusivity and manager-only team management.

Invariants:
    - Adding an existing member or the manager fails with 409
    - Adding an unknown user fails with 404
    - Removing a non-member fails with 409
"""

from uuid import uuid4


async def test_get_team_lists_members(client, manager, member, create_project, add_member):
    project_id = await create_project(manager)
    await add_member(manager, project_id, member)
    res = await client.get(f"/api/v1/projects/{project_id}/team", headers=member.headers)
    assert res.status_code == 200
    assert res.json() == [{
        "id": str(member.user.id),
        "name": member.user.name,
        "email": member.user.email,
    }]


async def test_find_member_by_email(client, manager, member, create_project):
    project_id = await create_project(manager)
    res = await client.post(
        f"/api/v1/projects/{project_id}/team/find",
        json={"email": member.user.email.upper()},
        headers=manager.headers,
    )
    assert res.status_code == 200
    assert res.json()["id"] == str(member.user.id)


async def test_find_unknown_email_returns_404(client, manager, create_project):
    project_id = await create_project(manager)
    res = await client.post(
        f"/api/v1/projects/{project_id}/team/find",
        json={"email": "nobody@example.com"},
        headers=manager.headers,
    )
    assert res.status_code == 404


async def test_adding_existing_member_returns_409(
    client, manager, member, create_project, add_member,
):
    project_id = await create_project(manager)
    await add_member(manager, project_id, member)
    res = await client.post(
        f"/api/v1/projects/{project_id}/team",
        json={"id": str(member.user.id)},
        headers=manager.headers,
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "ALREADY_TEAM_MEMBER"


async def test_adding_manager_to_team_returns_409(client, manager, create_project):
    project_id = await create_project(manager)
    res = await client.post(
        f"/api/v1/projects/{project_id}/team",
        json={"id": str(manager.user.id)},
        headers=manager.headers,
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "MANAGER_NOT_ALLOWED"


async def test_adding_unknown_user_returns_404(client, manager, create_project):
    project_id = await create_project(manager)
    res = await client.post(
        f"/api/v1/projects/{project_id}/team",
        json={"id": str(uuid4())},
        headers=manager.headers,
    )
    assert res.status_code == 404


async def test_team_member_cannot_add_members(
    client, manager, member, outsider, create_project, add_member,
):
    project_id = await create_project(manager)
    await add_member(manager, project_id, member)
    res = await client.post(
        f"/api/v1/projects/{project_id}/team",
        json={"id": str(outsider.user.id)},
        headers=member.headers,
    )
    assert res.status_code == 403


async def test_remove_member_revokes_access(
    client, manager, member, create_project, add_member,
):
    project_id = await create_project(manager)
    await add_member(manager, project_id, member)

    res = await client.delete(
        f"/api/v1/projects/{project_id}/team/{member.user.id}",
        headers=manager.headers,
    )
    assert res.status_code == 200

    team = await client.get(f"/api/v1/projects/{project_id}/team", headers=manager.headers)
    assert team.json() == []
    res = await client.get(f"/api/v1/projects/{project_id}", headers=member.headers)
    assert res.status_code == 403


async def test_removing_non_member_returns_409(client, manager, outsider, create_project):
    project_id = await create_project(manager)
    res = await client.delete(
        f"/api/v1/projects/{project_id}/team/{outsider.user.id}",
        headers=manager.headers,
    )
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "NOT_TEAM_MEMBER"
