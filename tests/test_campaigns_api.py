"""Tests for the campaign endpoints."""


def test_list_campaigns_with_status_filter(client, user_headers):
    body = client.get("/api/campaigns", params={"status": "active"}, headers=user_headers).json()

    assert {c["id"] for c in body["items"]} == {"camp_001", "camp_005"}
    assert body["total"] == 2


def test_status_all_means_no_filter(client, user_headers):
    body = client.get("/api/campaigns", params={"status": "all", "channel": "all"}, headers=user_headers).json()
    assert body["total"] == 5


def test_search_campaign_content(client, user_headers):
    body = client.get("/api/campaigns", params={"search": "survey"}, headers=user_headers).json()
    assert [c["id"] for c in body["items"]] == ["camp_005"]


def test_create_campaign_starts_as_draft(client, user_headers):
    payload = {
        "name": "Spring Promo",
        "description": "Seasonal discount",
        "channel": "whatsapp",
        "content": "20% off this week",
    }
    response = client.post("/api/campaigns", json=payload, headers=user_headers)

    assert response.status_code == 201
    campaign = response.json()
    assert campaign["status"] == "draft"
    assert campaign["audience"] == {"total": 0, "delivered": 0, "failed": 0, "opened": 0, "clicked": 0}
    assert campaign["schedule"]["type"] == "immediate"
    assert client.get(f"/api/campaigns/{campaign['id']}", headers=user_headers).status_code == 200


def test_create_campaign_requires_fields(client, user_headers):
    response = client.post("/api/campaigns", json={"name": "Half"}, headers=user_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Missing required fields: description, channel, content"


def test_update_campaign_keeps_id_and_refreshes_timestamp(client, user_headers):
    before = client.get("/api/campaigns/camp_003", headers=user_headers).json()
    response = client.put("/api/campaigns/camp_003", json={"status": "active"}, headers=user_headers)

    assert response.status_code == 200
    after = response.json()
    assert after["id"] == "camp_003"
    assert after["status"] == "active"
    assert after["name"] == before["name"]
    assert after["updated_at"] != before["updated_at"]


def test_delete_campaign(client, user_headers):
    response = client.delete("/api/campaigns/camp_002", headers=user_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Campaign deleted successfully"}
    assert client.get("/api/campaigns/camp_002", headers=user_headers).status_code == 404
    assert client.delete("/api/campaigns/camp_002", headers=user_headers).status_code == 404
