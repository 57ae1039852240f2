"""
Tests for the session lifecycle: validity window, revocation and sweeping.
"""
import asyncio
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from cure_it_api.app.core.errors import AuthenticationError
from cure_it_api.app.core.security import hash_password
from cure_it_api.app.main import create_app
from cure_it_api.app.services.auth_service import AuthService
from cure_it_api.app.services.session_service import SessionService
from cure_it_api.app.storage import MemoryStorage

from conftest import ADMIN_EMAIL, PASSWORD, USER_EMAIL


@pytest.fixture
def services(clock):
    storage = MemoryStorage()
    storage.initialize()
    sessions = SessionService(storage, ttl=timedelta(days=7), clock=clock)
    auth = AuthService(storage, sessions, admin_email=ADMIN_EMAIL)
    return storage, sessions, auth


def test_session_expires_after_validity_window(services, clock):
    storage, sessions, auth = services
    user, session = asyncio.run(auth.login(USER_EMAIL, PASSWORD))

    assert session.expires_at == clock.now + timedelta(days=7)

    clock.advance(days=7, microseconds=-1)
    assert asyncio.run(auth.current_user(session.id)).id == user.id

    clock.advance(microseconds=1)
    with pytest.raises(AuthenticationError):
        asyncio.run(auth.current_user(session.id))


def test_expired_session_is_inert_before_sweep(services, clock):
    storage, sessions, auth = services
    _, session = asyncio.run(auth.login(USER_EMAIL, PASSWORD))
    clock.advance(days=8)

    assert storage.get_session(session.id) is not None
    assert asyncio.run(sessions.resolve(session.id)) is None


def test_sweep_removes_only_expired_sessions(services, clock):
    storage, sessions, auth = services
    user, old = asyncio.run(auth.login(USER_EMAIL, PASSWORD))
    clock.advance(days=3)
    fresh = asyncio.run(sessions.create(user.id))
    clock.advance(days=5)

    removed = asyncio.run(sessions.sweep_expired())

    assert removed == 1
    assert storage.get_session(old.id) is None
    assert storage.get_session(fresh.id) is not None


def test_delete_reports_whether_session_existed(services):
    storage, sessions, auth = services
    _, session = asyncio.run(auth.login(USER_EMAIL, PASSWORD))

    assert asyncio.run(auth.logout(session.id)) is True
    assert asyncio.run(auth.logout(session.id)) is False


def test_session_tokens_are_unique(services):
    storage, sessions, auth = services
    user, _ = asyncio.run(auth.login(USER_EMAIL, PASSWORD))

    tokens = {asyncio.run(sessions.create(user.id)).id for _ in range(50)}

    assert len(tokens) == 50


def test_current_user_fails_when_account_is_missing(services):
    storage, sessions, auth = services
    session = asyncio.run(sessions.create("no-such-account"))

    with pytest.raises(AuthenticationError):
        asyncio.run(auth.current_user(session.id))


def test_background_sweeper_runs_until_cancelled(services, clock):
    storage, sessions, auth = services
    _, session = asyncio.run(auth.login(USER_EMAIL, PASSWORD))
    clock.advance(days=30)

    async def run_briefly():
        task = asyncio.create_task(sessions.run_sweeper(0.01))
        await asyncio.sleep(0.1)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(run_briefly())

    assert storage.get_session(session.id) is None


def test_app_lifespan_starts_and_stops_sweeper(settings):
    settings.session_sweep_interval_seconds = 3600
    app = create_app(settings)

    with TestClient(app):
        sweeper = app.state.sweeper
        assert sweeper is not None
        assert not sweeper.done()

    assert sweeper.done()
    assert app.state.sweeper is None


def test_concurrent_first_logins_share_one_account(services, monkeypatch):
    storage, sessions, auth = services
    existing = storage.create_user(
        {"email": USER_EMAIL, "password": hash_password(PASSWORD), "role": "user"}
    )
    lookup = storage.get_user_by_email
    calls = []

    def lookup_missing_once(email):
        calls.append(email)
        return None if len(calls) == 1 else lookup(email)

    monkeypatch.setattr(storage, "get_user_by_email", lookup_missing_once)

    user, session = asyncio.run(auth.login(USER_EMAIL, PASSWORD))

    assert user.id == existing.id
    assert len(storage.list_users()) == 1
    assert storage.get_session(session.id) is not None


def test_concurrent_first_login_still_checks_password(services, monkeypatch):
    storage, sessions, auth = services
    storage.create_user({"email": USER_EMAIL, "password": hash_password(PASSWORD), "role": "user"})
    lookup = storage.get_user_by_email
    calls = []

    def lookup_missing_once(email):
        calls.append(email)
        return None if len(calls) == 1 else lookup(email)

    monkeypatch.setattr(storage, "get_user_by_email", lookup_missing_once)

    with pytest.raises(AuthenticationError):
        asyncio.run(auth.login(USER_EMAIL, "wrong-password"))
