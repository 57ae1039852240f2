"""
Pytest configuration and fixtures for Cure It API tests.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from cure_it_api.app.core.config import Settings
from cure_it_api.app.main import create_app
from cure_it_api.app.storage import MemoryStorage, SQLiteStorage


ADMIN_EMAIL = "admin@cureit.app"
USER_EMAIL = "user@example.com"
PASSWORD = "secret123"


class FakeClock:
    """Controllable replacement for ``utcnow``."""

    def __init__(self, start=None):
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    """Settings for an isolated app on the seeded in-memory backend."""
    return Settings(
        storage_backend="memory",
        seed_data=True,
        admin_email=ADMIN_EMAIL,
        session_sweep_interval_seconds=0,
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client; entering it runs the app lifespan (storage init, seeding)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    """Log in through the API and return the JSON body."""

    def _login(email, password=PASSWORD):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()

    return _login


@pytest.fixture
def user_headers(login):
    token = login(USER_EMAIL)["sessionId"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(login):
    token = login(ADMIN_EMAIL)["sessionId"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(params=["memory", "sqlite"])
def storage(request, tmp_path):
    """An initialised, unseeded backend of each kind."""
    if request.param == "memory":
        backend = MemoryStorage()
    else:
        backend = SQLiteStorage(str(tmp_path / "cure_it.db"))
    backend.initialize()
    yield backend
    backend.close()
