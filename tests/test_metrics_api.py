"""Tests for the dashboard metrics endpoint."""


def test_overview_counts_the_collections(client, admin_headers, repositories):
    response = client.get("/api/admin/metrics", headers=admin_headers)

    assert response.status_code == 200
    metrics = response.json()["metrics"]
    assert metrics["users"]["total"] == 6
    assert metrics["users"]["active"] == 4
    assert metrics["users"]["suspended"] == 1
    assert metrics["users"]["total_balance"] == 355.5
    assert metrics["campaigns"]["running"] == 2
    assert metrics["projects"]["active"] == 2
    assert metrics["webhooks"] == {"total": 3, "active": 2}
    outbound = sum(1 for m in repositories.message_logs.list() if m["direction"] == "outbound")
    assert sum(channel["sent"] for channel in metrics["messaging"].values()) == outbound


def test_timeseries_has_hourly_buckets(client, admin_headers):
    body = client.get(
        "/api/admin/metrics", params={"type": "timeseries", "timeframe": "6h"}, headers=admin_headers
    ).json()

    assert body["timeframe"] == "6h"
    assert len(body["data"]) == 7
    stamps = [row["timestamp"] for row in body["data"]]
    assert stamps == sorted(stamps)
    assert {"sms_sent", "whatsapp_delivered", "transactions", "revenue"} <= set(body["data"][0])


def test_unknown_timeframe_defaults_to_a_day(client, admin_headers):
    body = client.get(
        "/api/admin/metrics", params={"type": "timeseries", "timeframe": "1w"}, headers=admin_headers
    ).json()

    assert body["timeframe"] == "24h"
    assert len(body["data"]) == 25


def test_alerts(client, admin_headers):
    alerts = client.get("/api/admin/metrics", params={"type": "alerts"}, headers=admin_headers).json()["alerts"]

    assert any(alert["message"] == "1 webhook(s) inactive" for alert in alerts)
    assert all({"id", "type", "message", "timestamp", "severity"} <= set(alert) for alert in alerts)


def test_unknown_metrics_type_returns_400(client, admin_headers):
    response = client.get("/api/admin/metrics", params={"type": "bogus"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {"message": "Invalid metrics type"}


def test_metrics_require_admin(client, user_headers):
    assert client.get("/api/admin/metrics", headers=user_headers).status_code == 403
