"""API test fixtures — async DB, FastAPI test client and seeded accounts.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - get_mailer overridden with a RecordingMailer so tests can read tokens
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - Users seeded directly in the DB (already confirmed) for project-level tests;
      the account flow itself is exercised through HTTP in test_auth_routes.py
"""

from dataclasses import dataclass

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

import uptask.infrastructure.database as db_module
import uptask.models  # noqa: F401
from uptask.db.base import Base
from uptask.infrastructure.database import get_db, DatabaseSessionManager
from uptask.infrastructure.mailer import (
    AuthEmail, build_confirmation_email, build_password_reset_email, get_mailer,
)
from uptask.infrastructure.security import create_access_token, hash_password
from uptask.main import app
from uptask.models.user import User


class RecordingMailer:
    """Captures outgoing auth mail instead of delivering it."""

    def __init__(self):
        self.sent: list[AuthEmail] = []

    async def send_confirmation_email(self, email, name, token):
        self.sent.append(build_confirmation_email(email, name, token))

    async def send_password_reset_token(self, email, name, token):
        self.sent.append(build_password_reset_email(email, name, token))

    def last_token_for(self, email: str) -> str:
        for message in reversed(self.sent):
            if message.to == email:
                return message.token
        raise AssertionError(f"no mail sent to {email}")


@dataclass
class Account:
    user: User
    password: str
    token: str

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
async def client(test_engine, test_session_factory, mailer):
    """FastAPI test client with DB and mailer dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer

    # Patch db_manager for the readiness probe, which uses it directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def make_account(test_session_factory):
    """Factory: insert a user and return it with a valid access token."""
    async def _make(
        name: str = "Ana", email: str | None = None,
        password: str = "password123", confirmed: bool = True,
    ) -> Account:
        email = email or f"{name.lower()}@example.com"
        async with test_session_factory() as session:
            user = User(
                name=name, email=email,
                password=hash_password(password), confirmed=confirmed,
            )
            session.add(user)
            await session.commit()
        return Account(
            user=user, password=password, token=create_access_token(user.id),
        )

    return _make


@pytest.fixture
async def manager(make_account):
    return await make_account("Manager")


@pytest.fixture
async def member(make_account):
    return await make_account("Member")


@pytest.fixture
async def outsider(make_account):
    return await make_account("Outsider")


@pytest.fixture
def create_project(client):
    """Factory: create a project through the API and return its id."""
    async def _create(account: Account, name: str = "Website") -> str:
        res = await client.post(
            "/api/v1/projects",
            json={
                "project_name": name,
                "client_name": "ACME",
                "description": f"{name} redesign",
            },
            headers=account.headers,
        )
        assert res.status_code == 201, res.text
        listing = await client.get("/api/v1/projects", headers=account.headers)
        return next(p["id"] for p in listing.json() if p["project_name"] == name)

    return _create


@pytest.fixture
def create_task(client):
    """Factory: create a task in a project and return its id."""
    async def _create(account: Account, project_id: str, name: str = "Design") -> str:
        res = await client.post(
            f"/api/v1/projects/{project_id}/tasks",
            json={"name": name, "description": f"{name} work"},
            headers=account.headers,
        )
        assert res.status_code == 201, res.text
        tasks = await client.get(
            f"/api/v1/projects/{project_id}/tasks", headers=account.headers,
        )
        return next(t["id"] for t in tasks.json() if t["name"] == name)

    return _create


@pytest.fixture
def add_member(client):
    """Factory: add an account to a project's team as its manager."""
    async def _add(manager_account: Account, project_id: str, account: Account):
        res = await client.post(
            f"/api/v1/projects/{project_id}/team",
            json={"id": str(account.user.id)},
            headers=manager_account.headers,
        )
        assert res.status_code == 200, res.text

    return _add
