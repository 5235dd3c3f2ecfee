"""
Pytest configuration and fixtures.
Provides an in-memory database, a seeded roster and HTTP clients logged in per role.
"""

import os

# Settings are read on first import of the package.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin-pass"
os.environ["DEFAULT_STAFF_PASSWORD"] = "sam123456"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from staff_attendance.core.access import Principal
from staff_attendance.db import session as db_session
from staff_attendance.db.base import Base
from staff_attendance.db.init_db import seed_initial_data
from staff_attendance.db.session import enable_sqlite_foreign_keys, get_db
from staff_attendance.main import app
from staff_attendance.models.user import UserRole
from staff_attendance.schemas.staff import StaffCreate
from staff_attendance.schemas.user import UserCreate
from staff_attendance.services.auth_service import AuthService
from staff_attendance.services.staff_service import StaffService


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN = ("admin", "admin-pass")
MANAGER = ("manager", "manager-pass")
EMPLOYEE = ("e1", "sam123456")

SEED_ADMIN = Principal(user_id=1, username="admin", role=UserRole.ADMIN)


@pytest.fixture(scope="function")
async def test_engine():
    """In-memory SQLite engine with foreign keys enforced."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
async def session_maker(test_engine, monkeypatch):
    """
    Point the application at the test engine and seed the admin account.
    """
    maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(db_session, "engine", test_engine)
    monkeypatch.setattr(db_session, "async_session_maker", maker)

    async def override_get_db():
        async with maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    await seed_initial_data()

    yield maker

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def test_db_session(session_maker):
    """A session on the test database."""
    async with session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def roster(session_maker):
    """
    Staff E1 (Sales) and E2 (Operations) with their employee logins, plus a manager account.
    """
    async with session_maker() as session:
        staff_service = StaffService(session)
        await staff_service.create_staff(
            SEED_ADMIN, StaffCreate(id="E1", name="Alice", dept="Sales", position="Clerk"),
        )
        await staff_service.create_staff(
            SEED_ADMIN, StaffCreate(id="E2", name="Bob", dept="Operations", position="Driver"),
        )
        await AuthService(session).create_user(
            SEED_ADMIN,
            UserCreate(username=MANAGER[0], password=MANAGER[1], role=UserRole.MANAGER),
        )
    return ["E1", "E2"]


async def login(client: AsyncClient, username: str, password: str) -> None:
    response = await client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text


def make_client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture(scope="function")
async def client(session_maker):
    """Anonymous HTTP client."""
    async with make_client() as client:
        yield client


@pytest.fixture(scope="function")
async def admin_client(session_maker):
    async with make_client() as client:
        await login(client, *ADMIN)
        yield client


@pytest.fixture(scope="function")
async def manager_client(roster):
    async with make_client() as client:
        await login(client, *MANAGER)
        yield client


@pytest.fixture(scope="function")
async def employee_client(roster):
    """Logged in as e1, the login created for staff E1."""
    async with make_client() as client:
        await login(client, *EMPLOYEE)
        yield client


@pytest.fixture(scope="function")
async def login_as(session_maker):
    """Factory for additional logged-in clients, closed at teardown."""
    clients = []

    async def _login_as(username: str, password: str) -> AsyncClient:
        client = make_client()
        clients.append(client)
        await login(client, username, password)
        return client

    yield _login_as

    for client in clients:
        await client.aclose()
