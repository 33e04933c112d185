"""Tests for the message log endpoints."""


def test_message_logs_page_and_summary(client, user_headers, settings):
    body = client.get("/api/messaging/logs", headers=user_headers).json()

    assert body["limit"] == 25
    assert body["total"] == settings.mock_message_log_count
    summary = body["summary"]
    assert summary["total_messages"] == body["total"]
    assert sum(summary["channels"].values()) == body["total"]
    assert summary["directions"]["inbound"] + summary["directions"]["outbound"] == body["total"]


def test_message_logs_filters(client, user_headers):
    body = client.get(
        "/api/messaging/logs",
        params={"channel": "sms", "direction": "outbound", "limit": 500},
        headers=user_headers,
    ).json()

    assert all(m["channel"] == "sms" and m["direction"] == "outbound" for m in body["items"])
    assert body["summary"]["channels"]["whatsapp"] == 0


def test_message_logs_sender_is_a_substring_filter(client, user_headers):
    body = client.get("/api/messaging/logs", params={"sender": "sozu", "limit": 500}, headers=user_headers).json()

    assert body["total"] > 0
    assert all(m["sender"] == "SOZURI" for m in body["items"])


def test_message_log_detail_has_delivery_history(client, user_headers, repositories):
    log = next(m for m in repositories.message_logs.list() if m["status"] == "read")
    body = client.get(f"/api/messaging/logs/{log['id']}", headers=user_headers).json()

    assert body["id"] == log["id"]
    assert [event["status"] for event in body["delivery_history"]] == ["sent", "delivered", "read"]


def test_failed_message_history_carries_the_error(client, user_headers, repositories):
    log = next(m for m in repositories.message_logs.list() if m["status"] == "failed")
    body = client.get(f"/api/messaging/logs/{log['id']}", headers=user_headers).json()

    failed = body["delivery_history"][-1]
    assert failed["status"] == "failed"
    assert failed["error_code"] == log["error_code"]


def test_unknown_message_log_returns_404(client, user_headers):
    response = client.get("/api/messaging/logs/msglog_0", headers=user_headers)

    assert response.status_code == 404
    assert response.json() == {"message": "Message log not found"}
