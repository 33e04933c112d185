"""Tests for token signing, password hashing and the auth dependencies."""

import time

from cpaas_admin_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    permissions_for_role,
    verify_password,
)


def test_token_round_trip_carries_claims():
    token = create_access_token({"sub": "user_2", "imp": "user_1"}, secret_key="k")
    payload = decode_access_token(token, secret_key="k")

    assert payload["sub"] == "user_2"
    assert payload["imp"] == "user_1"
    assert payload["jti"]
    assert payload["exp"] > time.time()


def test_token_signed_with_other_key_is_rejected():
    token = create_access_token({"sub": "user_1"}, secret_key="one")
    assert decode_access_token(token, secret_key="two") is None


def test_tampered_token_is_rejected():
    token = create_access_token({"sub": "user_2"}, secret_key="k")
    header, payload, signature = token.split(".")
    forged = create_access_token({"sub": "user_1"}, secret_key="k").split(".")[1]

    assert decode_access_token(f"{header}.{forged}.{signature}", secret_key="k") is None
    assert decode_access_token("not-a-token", secret_key="k") is None


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "user_1", "exp": 0}, expires_delta=-10, secret_key="k")
    assert decode_access_token(token, secret_key="k") is None


def test_password_hashing():
    hashed = hash_password("secret1")

    assert hashed != hash_password("secret1")
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)
    assert not verify_password("secret1", None)
    assert not verify_password("secret1", "garbage")


def test_permissions_follow_role():
    assert "admin" in permissions_for_role("admin")
    assert permissions_for_role("supervisor") == ["read", "write", "manage_agents"]
    assert permissions_for_role("agent") == ["read", "write"]


def test_requests_without_token_are_rejected(client):
    response = client.get("/api/campaigns")

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_requests_with_bad_token_are_rejected(client):
    response = client.get("/api/campaigns", headers={"Authorization": "Bearer abc.def.ghi"})
    assert response.status_code == 401


def test_token_for_inactive_user_is_rejected(client, settings):
    token = create_access_token({"sub": "user_4"}, secret_key=settings.secret_key)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_token_for_unknown_user_is_rejected(client, settings):
    token = create_access_token({"sub": "user_404"}, secret_key=settings.secret_key)
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_admin_routes_need_admin_permission(client, user_headers):
    response = client.get("/api/admin/users", headers=user_headers)

    assert response.status_code == 403
    assert response.json() == {"message": "Insufficient permissions"}


def test_unauthorized_check_runs_before_collection_access(app, client):
    class Exploding:
        def list(self):
            raise AssertionError("collection accessed")

    app.state.repositories.campaigns = Exploding()
    response = client.get("/api/campaigns")

    assert response.status_code == 401
