"""
Shared pytest fixtures for the portal tests.

Provides a throwaway SQLite database per test, a TestClient wired to it,
and signed-in users for each role.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from config import settings
from db.session import build_engine, get_db, init_db
from main import app


PASSWORD = "village-pass-123"

ADMIN_AADHAR = "100000000001"
EMPLOYEE_AADHAR = "200000000002"
MONITOR_AADHAR = "300000000003"
CITIZEN_AADHAR = "400000000004"
OTHER_CITIZEN_AADHAR = "500000000005"


def signup_body(aadhar: str, name: str = "Test Citizen", **overrides) -> dict:
    body = {
        "name": name,
        "aadhar": aadhar,
        "password": PASSWORD,
        "confirmPassword": PASSWORD,
        "contactNumber": "9876543210",
        "gender": "female",
        "dob": "1990-05-01",
        "age": 35,
        "educationalQualifications": "class_10_pass",
        "occupation": "farmer",
        "email": f"{aadhar}@example.com",
        "dateofjoining": "2024-01-01",
    }
    body.update(overrides)
    return body


def sign_in(client: TestClient, aadhar: str, password: str = PASSWORD) -> dict:
    resp = client.post("/api/auth/signin", json={"username": aadhar, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    """Full-strength PBKDF2 makes every signup slow; tests don't need it."""
    monkeypatch.setattr(settings, "PASSWORD_HASH_ITERATIONS", 1_000)


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'portal.db'}", poolclass=NullPool)
    asyncio.run(init_db(eng))
    return eng


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def run_db(session_factory):
    """Run `await fn(session)` on a fresh session and return its result."""

    def runner(fn):
        async def _go():
            async with session_factory() as db:
                return await fn(db)
        return asyncio.run(_go())

    return runner


@pytest.fixture
def count_rows(run_db):
    def counter(model) -> int:
        async def _count(db):
            return (await db.execute(select(func.count()).select_from(model))).scalar_one()
        return run_db(_count)
    return counter


# ── Signed-in users ───────────────────────────────────────────────────────────
@pytest.fixture
def admin_headers(client):
    resp = client.post("/api/auth/signup/admin", json=signup_body(ADMIN_AADHAR, name="Asha Admin"))
    assert resp.status_code == 201, resp.text
    return sign_in(client, ADMIN_AADHAR)


@pytest.fixture
def employee_headers(client, admin_headers):
    body = signup_body(EMPLOYEE_AADHAR, name="Ravi Employee", position="Secretary", salary=25000)
    resp = client.post("/api/admin/addemployee", json=body, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    return sign_in(client, EMPLOYEE_AADHAR)


@pytest.fixture
def monitor_headers(client, admin_headers):
    body = signup_body(MONITOR_AADHAR, name="Meena Monitor", salary=30000)
    resp = client.post("/api/admin/addmonitor", json=body, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    return sign_in(client, MONITOR_AADHAR)


@pytest.fixture
def citizen_headers(client):
    resp = client.post("/api/auth/signup/citizen", json=signup_body(CITIZEN_AADHAR, name="Kiran Farmer"))
    assert resp.status_code == 201, resp.text
    return sign_in(client, CITIZEN_AADHAR)


@pytest.fixture
def other_citizen_headers(client):
    resp = client.post("/api/auth/signup/citizen", json=signup_body(OTHER_CITIZEN_AADHAR, name="Lata Weaver",
                                                                     occupation="weaver"))
    assert resp.status_code == 201, resp.text
    return sign_in(client, OTHER_CITIZEN_AADHAR)


@pytest.fixture
def server_error_client(client):
    """Same app and database, but unhandled errors come back as responses instead of raising."""
    return TestClient(app, raise_server_exceptions=False)
