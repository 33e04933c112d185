"""Tests for the user administration endpoints."""

import pytest


def test_list_users_paginates_and_hides_passwords(client, admin_headers):
    response = client.get("/api/admin/users", params={"page": 1, "limit": 4}, headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 6
    assert body["limit"] == 4
    assert body["totalPages"] == 2
    assert len(body["items"]) == 4
    assert all("password" not in user for user in body["items"])


def test_list_users_filters_by_role_and_searches(client, admin_headers):
    admins = client.get("/api/admin/users", params={"role": "admin"}, headers=admin_headers).json()
    assert {u["id"] for u in admins["items"]} == {"user_1", "user_6"}

    found = client.get("/api/admin/users", params={"search": "JANE"}, headers=admin_headers).json()
    assert [u["id"] for u in found["items"]] == ["user_2"]


def test_invalid_date_bound_returns_400(client, admin_headers):
    response = client.get("/api/admin/users", params={"startDate": "yesterday"}, headers=admin_headers)

    assert response.status_code == 400
    assert "startDate" in response.json()["message"]


def test_get_missing_user_returns_404(client, admin_headers):
    response = client.get("/api/admin/users/user_999", headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}


def test_create_user_derives_permissions_and_project(client, admin_headers):
    payload = {"name": "Sam Agent", "email": "sam@example.com", "role": "supervisor", "password": "secret1"}
    response = client.post("/api/admin/users", json=payload, headers=admin_headers)

    assert response.status_code == 201
    user = response.json()
    assert user["id"].startswith("user_")
    assert user["status"] == "active"
    assert user["permissions"] == ["read", "write", "manage_agents"]
    assert user["project_id"].startswith("proj_")
    assert "password" not in user

    login = client.post("/api/auth/login", json={"email": "sam@example.com", "password": "secret1"})
    assert login.status_code == 200


def test_create_user_requires_fields(client, admin_headers):
    response = client.post("/api/admin/users", json={"name": "No Email"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Missing required fields: email, role"


def test_create_user_rejects_duplicate_email(client, admin_headers):
    payload = {"name": "Copy", "email": "Jane.Smith@example.com", "role": "user"}
    response = client.post("/api/admin/users", json=payload, headers=admin_headers)

    assert response.status_code == 400
    assert "already exists" in response.json()["message"]


def test_malformed_json_returns_400(client, admin_headers):
    response = client.post(
        "/api/admin/users",
        content="{not json",
        headers={**admin_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Invalid JSON body"}


def test_update_user_merges_and_rederives_permissions(client, admin_headers):
    response = client.put("/api/admin/users/user_2", json={"role": "admin"}, headers=admin_headers)

    assert response.status_code == 200
    user = response.json()
    assert user["id"] == "user_2"
    assert user["name"] == "Jane Smith"
    assert "impersonate" in user["permissions"]


def test_delete_user(client, admin_headers):
    response = client.delete("/api/admin/users/user_3", headers=admin_headers)
    assert response.status_code == 204

    assert client.get("/api/admin/users/user_3", headers=admin_headers).status_code == 404


def test_last_admin_cannot_be_deleted(client, admin_headers):
    assert client.delete("/api/admin/users/user_6", headers=admin_headers).status_code == 204

    response = client.delete("/api/admin/users/user_1", headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Cannot delete the last admin user"}


def test_topup_credits_balance_and_records_transaction(client, admin_headers):
    response = client.post("/api/admin/users/user_2/topup", json={"amount": 49.25}, headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["balance"] == 300.0
    assert body["amount"] == 49.25
    assert body["user_id"] == "user_2"

    history = client.get(
        "/api/admin/users/user_2/transactions", params={"limit": 1}, headers=admin_headers
    ).json()
    assert history["items"][0]["id"] == body["transaction_id"]
    assert history["items"][0]["type"] == "topup"


def test_topup_rejects_non_positive_amounts(client, admin_headers):
    for amount in (0, -5):
        response = client.post("/api/admin/users/user_2/topup", json={"amount": amount}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid amount. Must be greater than 0"}

    headers = {**admin_headers, "Content-Type": "application/json"}
    for raw in ('{"amount": NaN}', '{"amount": Infinity}', '{"amount": -Infinity}'):
        response = client.post("/api/admin/users/user_2/topup", content=raw, headers=headers)
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid amount. Must be greater than 0"}

    user = client.get("/api/admin/users/user_2", headers=admin_headers).json()
    assert user["balance"] is not None


def test_transactions_filter_and_summary(client, admin_headers, settings):
    everything = client.get("/api/admin/users/user_2/transactions", headers=admin_headers).json()
    assert everything["total"] == settings.mock_transactions_per_user
    assert everything["limit"] == 20
    assert everything["summary"]["total_transactions"] == settings.mock_transactions_per_user
    stamps = [t["timestamp"] for t in everything["items"]]
    assert stamps == sorted(stamps, reverse=True)

    refunds = client.get(
        "/api/admin/users/user_2/transactions", params={"type": "refund", "limit": 100}, headers=admin_headers
    ).json()
    assert all(t["type"] == "refund" for t in refunds["items"])
    assert refunds["summary"]["total_transactions"] == refunds["total"]
    assert refunds["summary"]["total_topups"] == 0
    assert refunds["summary"]["total_refunds"] == pytest.approx(sum(abs(t["amount"]) for t in refunds["items"]), abs=0.01)


def test_transactions_of_unknown_user_return_404(client, admin_headers):
    response = client.get("/api/admin/users/user_999/transactions", headers=admin_headers)
    assert response.status_code == 404


def test_projects_are_listed_and_filtered(client, admin_headers):
    body = client.get("/api/admin/projects", params={"status": "active"}, headers=admin_headers).json()

    assert {p["id"] for p in body["items"]} == {"proj_1", "proj_2"}
    project = client.get("/api/admin/projects/proj_3", headers=admin_headers).json()
    assert project["name"] == "Order Notifications"
