from datetime import timedelta

from expense_tracker.core.security import create_access_token


def test_register_returns_identity_and_token(client):
    r = client.post("/api/auth/register", json={"name": "Asha", "email": "Asha@Example.com", "password": "pw123456"})
    assert r.status_code == 201
    body = r.json()
    assert body["name"] == "Asha"
    assert body["email"] == "asha@example.com"
    assert body["token"]
    assert "password" not in body and "password_hash" not in body


def test_register_duplicate_email(client, register_user):
    register_user()
    r = client.post("/api/auth/register", json={"name": "Other", "email": "asha@example.com", "password": "x"})
    assert r.status_code == 400
    assert r.json()["message"] == "User with this email already exists"


def test_register_missing_field(client):
    r = client.post("/api/auth/register", json={"name": "Asha", "email": "asha@example.com"})
    assert r.status_code == 400
    assert "password" in r.json()["message"]


def test_login(client, register_user):
    register_user()
    r = client.post("/api/auth/login", json={"email": "asha@example.com", "password": "secret123"})
    assert r.status_code == 200
    token = r.json()["token"]

    r = client.get("/api/expenses", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200


def test_login_bad_credentials(client, register_user):
    register_user()
    for payload in (
        {"email": "asha@example.com", "password": "wrong"},
        {"email": "nobody@example.com", "password": "secret123"},
    ):
        r = client.post("/api/auth/login", json=payload)
        assert r.status_code == 401
        assert r.json()["message"] == "Invalid email or password"


def test_protected_routes_need_token(client):
    for method, path in [
        ("GET", "/api/expenses"),
        ("POST", "/api/expenses"),
        ("DELETE", "/api/expenses/1"),
        ("GET", "/api/expenses/summary/monthly"),
        ("GET", "/api/expenses/summary/daily?month=2024-01"),
        ("GET", "/api/user/income"),
        ("POST", "/api/user/income"),
        ("GET", "/api/user/balance"),
        ("POST", "/api/auth/logout"),
    ]:
        r = client.request(method, path)
        assert r.status_code == 401, path
        assert r.json()["message"] == "Not authorized, no token"


def test_garbage_token(client):
    r = client.get("/api/expenses", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_expired_token(client, register_user):
    register_user()
    token = create_access_token(1, expires_delta=timedelta(seconds=-10))
    r = client.get("/api/expenses", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_token_for_unknown_user(client):
    token = create_access_token(404)
    r = client.get("/api/expenses", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
    assert r.json()["message"] == "Not authorized, user not found"


def test_logout_revokes_token(client, auth_headers):
    r = client.post("/api/auth/logout", headers=auth_headers)
    assert r.status_code == 200

    r = client.get("/api/expenses", headers=auth_headers)
    assert r.status_code == 401
    assert r.json()["message"] == "Not authorized, token revoked"

    # a fresh login still works
    r = client.post("/api/auth/login", json={"email": "asha@example.com", "password": "secret123"})
    fresh = {"Authorization": f"Bearer {r.json()['token']}"}
    assert client.get("/api/expenses", headers=fresh).status_code == 200


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
