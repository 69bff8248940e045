"""Project Routes — creation, visibility and manager-only writes.

Invariants:
    - Creating a project sets the creator as manager
    - Listing shows managed and member projects only
    - Manager and team members may read; outsiders get 403
    - Only the manager may update or delete
    - Deleting a project removes its tasks and notes
"""

from uuid import uuid4

from sqlalchemy import func, select

from uptask.models.note import Note
from uptask.models.task import Task

PROJECT_BODY = {
    "project_name": "Renamed",
    "client_name": "Globex",
    "description": "New scope",
}


async def test_create_project_sets_creator_as_manager(client, manager, create_project):
    project_id = await create_project(manager)
    res = await client.get(f"/api/v1/projects/{project_id}", headers=manager.headers)
    assert res.status_code == 200
    body = res.json()
    assert body["manager_id"] == str(manager.user.id)
    assert body["team_ids"] == []
    assert body["tasks"] == []


async def test_project_collection_accepts_trailing_slash(client, manager):
    res = await client.post(
        "/api/v1/projects/", json=PROJECT_BODY, headers=manager.headers,
    )
    assert res.status_code == 201

    res = await client.get("/api/v1/projects/", headers=manager.headers)
    assert res.status_code == 200
    assert [p["project_name"] for p in res.json()] == ["Renamed"]


async def test_create_project_requires_authentication(client):
    res = await client.post("/api/v1/projects", json=PROJECT_BODY)
    assert res.status_code == 401


async def test_create_project_rejects_blank_fields(client, manager):
    res = await client.post(
        "/api/v1/projects",
        json={**PROJECT_BODY, "client_name": "   "},
        headers=manager.headers,
    )
    assert res.status_code == 400


async def test_list_projects_shows_managed_and_member_projects(
    client, manager, member, outsider, create_project, add_member,
):
    shared = await create_project(manager, "Shared")
    await create_project(manager, "Private")
    await add_member(manager, shared, member)
    await create_project(outsider, "Elsewhere")

    manager_names = {
        p["project_name"]
        for p in (await client.get("/api/v1/projects", headers=manager.headers)).json()
    }
    member_names = {
        p["project_name"]
        for p in (await client.get("/api/v1/projects", headers=member.headers)).json()
    }

    assert manager_names == {"Shared", "Private"}
    assert member_names == {"Shared"}


async def test_team_member_can_read_project(
    client, manager, member, create_project, add_member,
):
    project_id = await create_project(manager)
    await add_member(manager, project_id, member)
    res = await client.get(f"/api/v1/projects/{project_id}", headers=member.headers)
    assert res.status_code == 200
    assert res.json()["team_ids"] == [str(member.user.id)]


async def test_outsider_cannot_read_project(client, manager, outsider, create_project):
    project_id = await create_project(manager)
    res = await client.get(f"/api/v1/projects/{project_id}", headers=outsider.headers)
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "NOT_AUTHORIZED"


async def test_get_unknown_project_returns_404(client, manager):
    res = await client.get(f"/api/v1/projects/{uuid4()}", headers=manager.headers)
    assert res.status_code == 404


async def test_malformed_project_id_returns_400(client, manager):
    res = await client.get("/api/v1/projects/not-a-uuid", headers=manager.headers)
    assert res.status_code == 400


async def test_manager_can_update_project(client, manager, create_project):
    project_id = await create_project(manager)
    res = await client.put(
        f"/api/v1/projects/{project_id}", json=PROJECT_BODY, headers=manager.headers,
    )
    assert res.status_code == 200
    body = (await client.get(
        f"/api/v1/projects/{project_id}", headers=manager.headers,
    )).json()
    assert body["project_name"] == "Renamed"
    assert body["client_name"] == "Globex"


async def test_team_member_cannot_update_project(
    client, manager, member, create_project, add_member,
):
    project_id = await create_project(manager)
    await add_member(manager, project_id, member)
    res = await client.put(
        f"/api/v1/projects/{project_id}", json=PROJECT_BODY, headers=member.headers,
    )
    assert res.status_code == 403
    body = (await client.get(
        f"/api/v1/projects/{project_id}", headers=manager.headers,
    )).json()
    assert body["project_name"] == "Website"


async def test_team_member_cannot_delete_project(
    client, manager, member, create_project, add_member,
):
    project_id = await create_project(manager)
    await add_member(manager, project_id, member)
    res = await client.delete(f"/api/v1/projects/{project_id}", headers=member.headers)
    assert res.status_code == 403


async def test_delete_project_cascades_tasks_and_notes(
    client, manager, create_project, create_task, test_session_factory,
):
    project_id = await create_project(manager)
    task_id = await create_task(manager, project_id)
    await client.post(
        f"/api/v1/projects/{project_id}/tasks/{task_id}/notes",
        json={"content": "First note"},
        headers=manager.headers,
    )

    res = await client.delete(f"/api/v1/projects/{project_id}", headers=manager.headers)
    assert res.status_code == 200

    res = await client.get(f"/api/v1/projects/{project_id}", headers=manager.headers)
    assert res.status_code == 404
    async with test_session_factory() as db:
        assert (await db.execute(select(func.count()).select_from(Task))).scalar() == 0
        assert (await db.execute(select(func.count()).select_from(Note))).scalar() == 0
