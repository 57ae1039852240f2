"""
Tests for login, registration, logout and session resolution over HTTP.
"""
from conftest import ADMIN_EMAIL, PASSWORD, USER_EMAIL


def test_login_provisions_unseen_email_as_user(client, app):
    response = client.post("/api/auth/login", json={"email": USER_EMAIL, "password": PASSWORD})

    assert response.status_code == 200
    data = response.json()
    assert data["sessionId"]
    assert data["user"]["email"] == USER_EMAIL
    assert data["user"]["role"] == "user"
    assert data["user"]["lastLoginAt"] is not None
    assert "password" not in data["user"]
    assert len(app.state.storage.list_users()) == 1


def test_login_provisions_designated_admin_email_as_admin(login):
    data = login(ADMIN_EMAIL)
    assert data["user"]["role"] == "admin"


def test_repeated_login_reuses_account(login, app):
    first = login(USER_EMAIL)
    second = login(USER_EMAIL)

    assert first["user"]["id"] == second["user"]["id"]
    assert first["sessionId"] != second["sessionId"]
    assert len(app.state.storage.list_users()) == 1


def test_wrong_password_creates_no_session_and_keeps_last_login(client, login, app):
    login(USER_EMAIL)
    storage = app.state.storage
    before = storage.get_user_by_email(USER_EMAIL).last_login_at
    sessions_before = len(storage._sessions)

    response = client.post("/api/auth/login", json={"email": USER_EMAIL, "password": "wrong-password"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}
    assert storage.get_user_by_email(USER_EMAIL).last_login_at == before
    assert len(storage._sessions) == sessions_before


def test_login_rejects_malformed_email(client):
    response = client.post("/api/auth/login", json={"email": "not-an-email", "password": PASSWORD})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid input"
    assert any(detail.startswith("body.email") for detail in body["details"])


def test_login_rejects_empty_password(client):
    response = client.post("/api/auth/login", json={"email": USER_EMAIL, "password": ""})
    assert response.status_code == 400


def test_register_creates_user(client):
    response = client.post("/api/auth/register", json={"email": "new@example.com", "password": PASSWORD})

    assert response.status_code == 201
    user = response.json()["user"]
    assert user["role"] == "user"
    assert "password" not in user


def test_register_rejects_duplicate_email(client):
    payload = {"email": "dup@example.com", "password": PASSWORD}
    assert client.post("/api/auth/register", json=payload).status_code == 201

    response = client.post("/api/auth/register", json=payload)

    assert response.status_code == 400
    assert "already exists" in response.json()["error"]


def test_register_requires_minimum_password_length(client):
    response = client.post("/api/auth/register", json={"email": "short@example.com", "password": "12345"})
    assert response.status_code == 400


def test_registered_account_can_log_in(client):
    client.post("/api/auth/register", json={"email": "reg@example.com", "password": PASSWORD})

    ok = client.post("/api/auth/login", json={"email": "reg@example.com", "password": PASSWORD})
    bad = client.post("/api/auth/login", json={"email": "reg@example.com", "password": "nope-nope"})

    assert ok.status_code == 200
    assert bad.status_code == 401


def test_register_admin_role_needs_admin_caller(client, user_headers, admin_headers):
    payload = {"email": "boss@example.com", "password": PASSWORD, "role": "admin"}

    anonymous = client.post("/api/auth/register", json=payload)
    as_user = client.post("/api/auth/register", json=payload, headers=user_headers)
    as_admin = client.post("/api/auth/register", json=payload, headers=admin_headers)

    assert anonymous.status_code == 403
    assert as_user.status_code == 403
    assert as_admin.status_code == 201
    assert as_admin.json()["user"]["role"] == "admin"


def test_register_admin_role_with_unknown_token_is_unauthorized(client):
    payload = {"email": "boss@example.com", "password": PASSWORD, "role": "admin"}

    response = client.post("/api/auth/register", json=payload, headers={"Authorization": "Bearer stale-token"})

    assert response.status_code == 401


def test_register_user_ignores_stale_authorization_header(client):
    payload = {"email": "fresh@example.com", "password": PASSWORD}

    response = client.post("/api/auth/register", json=payload, headers={"Authorization": "Bearer stale-token"})

    assert response.status_code == 201
    assert response.json()["user"]["role"] == "user"


def test_me_returns_current_account(client, user_headers):
    response = client.get("/api/auth/me", headers=user_headers)

    assert response.status_code == 200
    assert response.json()["user"]["email"] == USER_EMAIL


def test_me_without_token_is_unauthorized(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_me_with_unknown_token_is_unauthorized(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-session"})
    assert response.status_code == 401


def test_logout_invalidates_session_and_is_idempotent(client, user_headers):
    first = client.post("/api/auth/logout", headers=user_headers)
    after = client.get("/api/auth/me", headers=user_headers)
    second = client.post("/api/auth/logout", headers=user_headers)

    assert first.json() == {"success": True}
    assert after.status_code == 401
    assert second.status_code == 200
    assert second.json() == {"success": True}


def test_logout_requires_bearer_header(client):
    assert client.post("/api/auth/logout").status_code == 401


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
