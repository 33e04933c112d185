"""Tests for webhook and integration endpoints."""

import pytest


def test_list_webhooks_filtered_by_active_flag(client, user_headers):
    body = client.get("/api/webhooks", params={"isActive": "false"}, headers=user_headers).json()
    assert [w["id"] for w in body["items"]] == ["wh_3"]


def test_create_webhook(client, user_headers):
    payload = {"url": "https://hooks.example.com/in", "events": ["message.sent", "message.sent", "message.read"]}
    response = client.post("/api/webhooks", json=payload, headers=user_headers)

    assert response.status_code == 201
    webhook = response.json()
    assert webhook["events"] == ["message.sent", "message.read"]
    assert webhook["isActive"] is True
    assert webhook["id"].startswith("wh_")


@pytest.mark.parametrize(
    "payload",
    [
        {"url": "ftp://example.com", "events": ["message.sent"]},
        {"url": "https://example.com", "events": []},
        {"events": ["message.sent"]},
    ],
)
def test_create_webhook_validation(client, user_headers, payload):
    response = client.post("/api/webhooks", json=payload, headers=user_headers)

    assert response.status_code == 400
    assert response.json()["message"]


def test_update_and_delete_webhook(client, user_headers):
    response = client.put("/api/webhooks/wh_3", json={"isActive": True}, headers=user_headers)
    assert response.status_code == 200
    assert response.json()["isActive"] is True
    assert response.json()["url"] == "https://example.com/hook3"

    assert client.delete("/api/webhooks/wh_3", headers=user_headers).status_code == 204
    assert client.get("/api/webhooks/wh_3", headers=user_headers).status_code == 404


def test_webhook_update_ignores_unknown_fields(client, user_headers):
    response = client.put("/api/webhooks/wh_1", json={"id": "wh_9", "secret": "x"}, headers=user_headers)

    assert response.status_code == 200
    assert response.json()["id"] == "wh_1"
    assert client.get("/api/webhooks/wh_9", headers=user_headers).status_code == 404


def test_integrations_crud(client, user_headers):
    listed = client.get("/api/integrations", params={"type": "hubspot"}, headers=user_headers).json()
    assert [i["id"] for i in listed["items"]] == ["int_2"]

    created = client.post(
        "/api/integrations", json={"type": "salesforce", "name": "CRM sync"}, headers=user_headers
    )
    assert created.status_code == 201
    integration = created.json()
    assert integration["connected"] is True

    updated = client.put(
        f"/api/integrations/{integration['id']}", json={"connected": False}, headers=user_headers
    ).json()
    assert updated["connected"] is False
    assert updated["name"] == "CRM sync"

    assert client.delete(f"/api/integrations/{integration['id']}", headers=user_headers).status_code == 204


def test_integration_type_is_validated(client, user_headers):
    response = client.post("/api/integrations", json={"type": "myspace", "name": "Old"}, headers=user_headers)
    assert response.status_code == 400
