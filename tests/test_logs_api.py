"""Tests for system logs, user logs and the log downloads."""

import csv
import io
import json

from cpaas_admin_api.app.services.log_service import newest_first
from cpaas_admin_api.app.utils.time import today_stamp


def test_system_logs_default_to_newest_first(client, admin_headers, settings):
    body = client.get("/api/admin/logs", headers=admin_headers).json()

    assert body["total"] == settings.mock_log_count
    assert body["limit"] == 50
    stamps = [log["timestamp"] for log in body["items"]]
    assert stamps == sorted(stamps, reverse=True)


def test_system_logs_filter_by_level_and_search(client, admin_headers):
    errors = client.get("/api/admin/logs", params={"level": "error", "limit": 500}, headers=admin_headers).json()
    assert errors["total"] > 0
    assert all(log["level"] == "error" for log in errors["items"])

    timeouts = client.get(
        "/api/admin/logs", params={"search": "TIMEOUT", "limit": 500}, headers=admin_headers
    ).json()
    assert all("timeout" in log["message"].lower() for log in timeouts["items"])


def test_system_logs_date_range(client, admin_headers):
    everything = client.get("/api/admin/logs", params={"limit": 500}, headers=admin_headers).json()["items"]
    pivot = everything[len(everything) // 2]["timestamp"]

    newer = client.get(
        "/api/admin/logs", params={"startDate": pivot, "limit": 500}, headers=admin_headers
    ).json()
    assert newer["total"] == sum(1 for log in everything if log["timestamp"] >= pivot)


def test_system_logs_require_admin(client, user_headers):
    assert client.get("/api/admin/logs", headers=user_headers).status_code == 403


def test_user_logs_only_show_the_callers_entries(client, admin_headers, repositories):
    expected = sum(1 for log in repositories.logs.list() if log["userId"] == "user_1")
    body = client.get("/api/users/logs", params={"limit": 500}, headers=admin_headers).json()

    assert body["total"] == expected
    assert all(log["userId"] == "user_1" for log in body["items"])


def test_download_logs_as_csv(client, admin_headers):
    response = client.get(
        "/api/admin/logs/download", params={"format": "csv", "level": "warn"}, headers=admin_headers
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"] == f'attachment; filename="logs_{today_stamp()}.csv"'
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0][:4] == ["ID", "Timestamp", "Level", "Message"]
    assert rows[1:] and all(row[2] == "warn" for row in rows[1:])


def test_download_logs_as_text(client, admin_headers):
    response = client.get("/api/admin/logs/download", params={"format": "txt"}, headers=admin_headers)

    assert response.headers["content-type"].startswith("text/plain")
    first = response.text.splitlines()[0]
    assert first.startswith("[") and "UTC] " in first


def test_download_unknown_format_falls_back_to_json(client, admin_headers, settings):
    response = client.get("/api/admin/logs/download", params={"format": "xml"}, headers=admin_headers)

    assert response.headers["content-type"].startswith("application/json")
    assert len(json.loads(response.text)) == settings.mock_log_count


def test_download_own_logs(client, user_headers):
    response = client.get("/api/users/logs/download", params={"format": "json"}, headers=user_headers)

    assert response.status_code == 200
    assert f'filename="user_user_2_logs_{today_stamp()}.json"' in response.headers["content-disposition"]
    assert all(log["userId"] == "user_2" for log in json.loads(response.text))


def test_exports_order_mixed_timestamp_formats_by_time():
    logs = [
        {"id": "log_a", "timestamp": "2024-01-15T10:30:00Z"},
        {"id": "log_b", "timestamp": "2024-01-15T10:30:00.500Z"},
        {"id": "log_c", "timestamp": "2024-01-15T12:00:00+03:00"},
        {"id": "log_d", "timestamp": "not a date"},
    ]

    assert [log["id"] for log in newest_first(logs)] == ["log_b", "log_a", "log_c", "log_d"]
