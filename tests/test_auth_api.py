"""Tests for login, logout and impersonation."""


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def test_login_returns_user_and_token(client):
    response = client.post("/api/auth/login", json={"email": "demo@admin.com", "password": "demo123"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["id"] == "user_6"
    assert body["user"]["isImpersonating"] is False
    assert "password" not in body["user"]
    assert body["token"].count(".") == 2


def test_login_stamps_last_login(client, repositories):
    before = repositories.users.get("user_2")["last_login"]
    client.post("/api/auth/login", json={"email": "jane.smith@example.com", "password": "user123"})

    assert repositories.users.get("user_2")["last_login"] != before


def test_login_failures(client):
    missing = client.post("/api/auth/login", json={"email": "demo@admin.com"})
    assert missing.status_code == 400
    assert missing.json() == {"message": "Email and password are required"}

    wrong = client.post("/api/auth/login", json={"email": "demo@admin.com", "password": "nope"})
    assert wrong.status_code == 401
    assert wrong.json() == {"message": "Invalid credentials"}

    no_password = client.post("/api/auth/login", json={"email": "bob.johnson@example.com", "password": "x"})
    assert no_password.status_code == 401


def test_demo_credentials_only_in_debug(client, app):
    response = client.get("/api/auth/login")
    assert response.status_code == 200
    assert {c["email"] for c in response.json()["credentials"]} >= {"demo@admin.com"}

    app.state.settings.debug = False
    assert client.get("/api/auth/login").status_code == 404


def test_me_returns_current_user(client, user_headers):
    body = client.get("/api/auth/me", headers=user_headers).json()

    assert body["id"] == "user_2"
    assert body["permissions"] == ["read", "write"]
    assert body["isImpersonating"] is False


def test_logout_revokes_token(client, admin_headers):
    response = client.post("/api/auth/logout", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Logout successful"}

    assert client.get("/api/auth/me", headers=admin_headers).status_code == 401


def test_impersonation_round_trip(client, admin_headers):
    response = client.post("/api/auth/impersonate", json={"userId": "user_2"}, headers=admin_headers)
    assert response.status_code == 200
    session = response.json()
    assert session["user"]["id"] == "user_2"
    assert session["user"]["isImpersonating"] is True
    assert session["user"]["originalUserId"] == "user_1"
    assert session["user"]["originalUserName"] == "John Doe"

    impersonated = bearer(session["token"])
    me = client.get("/api/auth/me", headers=impersonated).json()
    assert me["id"] == "user_2"
    assert me["originalUserId"] == "user_1"
    # The impersonated session carries the target's permissions.
    assert client.get("/api/admin/users", headers=impersonated).status_code == 403

    restored = client.post("/api/auth/stop-impersonation", headers=impersonated)
    assert restored.status_code == 200
    assert restored.json()["user"]["id"] == "user_1"
    assert restored.json()["user"]["isImpersonating"] is False

    assert client.get("/api/auth/me", headers=impersonated).status_code == 401
    assert client.get("/api/admin/users", headers=bearer(restored.json()["token"])).status_code == 200


def test_impersonation_rules(client, admin_headers, user_headers):
    cases = [
        (user_headers, {"userId": "user_3"}, 403, "Insufficient permissions to impersonate users"),
        (admin_headers, {}, 400, "Missing required field: userId"),
        (admin_headers, {"userId": "user_999"}, 404, "Target user not found"),
        (admin_headers, {"userId": "user_4"}, 400, "Cannot impersonate inactive user"),
        (admin_headers, {"userId": "user_6"}, 403, "Cannot impersonate another admin user"),
    ]
    for headers, payload, status_code, message in cases:
        response = client.post("/api/auth/impersonate", json=payload, headers=headers)
        assert response.status_code == status_code, payload
        assert response.json() == {"message": message}


def test_stop_impersonation_without_impersonating(client, admin_headers):
    response = client.post("/api/auth/stop-impersonation", headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {"message": "Not currently impersonating any user"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
