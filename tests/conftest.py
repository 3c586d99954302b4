"""
Shared pytest fixtures.

Uses a SQLite database file so no Postgres is required for tests.
Rate limiting is switched off and the request clock is pinned per test.
"""
import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.deps import get_now
from app.db.base import Base, get_db
from app.main import app
from app.middleware.rate_limit import limiter

SQLITE_URL = "sqlite:///./test_habits.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Sunday 2024-03-10, midday UTC
FIXED_NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


class Clock:
    """Mutable stand-in for the request clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    limiter.enabled = False
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def clock():
    return Clock(FIXED_NOW)


@pytest.fixture()
def client(clock):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def unique_email() -> str:
    return f"user-{uuid.uuid4().hex[:12]}@example.com"


@pytest.fixture()
def register(client):
    """Factory: register a user and return the `{user, token}` body."""
    def _register(email=None, password="secret123", name="Test User") -> dict:
        r = client.post(
            "/register",
            json={"name": name, "email": email or unique_email(), "password": password},
        )
        assert r.status_code == 201, r.text
        return r.json()
    return _register


@pytest.fixture()
def auth_headers(register) -> dict:
    """Bearer header for a freshly registered user."""
    token = register()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_headers(register) -> dict:
    token = register()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def habit(client, auth_headers) -> dict:
    r = client.post(
        "/habits",
        json={"title": "Read 20 pages", "frequency": "daily", "tags": ["reading"]},
        headers=auth_headers,
    )
    assert r.status_code == 201, r.text
    return r.json()
