"""Tests for the requests based API client, run against the in-process app."""

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from cpaas_admin_client import AdminAPIClient


class InProcessSession:
    """Minimal stand-in for ``requests.Session`` that forwards to a TestClient."""

    def __init__(self, client):
        self.client = client

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        result = self.client.request(method, url, params=params, json=json, headers=headers)
        response = requests.Response()
        response.status_code = result.status_code
        response._content = result.content
        response.headers = CaseInsensitiveDict(result.headers)
        response.encoding = "utf-8"
        response.url = url
        return response


class OfflineSession:
    def request(self, *args, **kwargs):
        raise requests.ConnectionError("connection refused")


@pytest.fixture
def api(client):
    return AdminAPIClient("http://testserver/", session=InProcessSession(client))


def test_login_stores_token(api):
    data, error = api.login("john.doe@example.com", "admin123")

    assert error is None
    assert api.token == data["token"]
    me, error = api.me()
    assert me["id"] == "user_1"


def test_errors_are_returned_not_raised(api):
    data, error = api.list_campaigns()
    assert data is None
    assert error == {"status_code": 401, "message": "Unauthorized"}

    data, error = api.login("john.doe@example.com", "wrong")
    assert error["status_code"] == 401
    assert api.token is None


def test_user_administration(api):
    api.login("john.doe@example.com", "admin123")

    users, error = api.list_users(role="admin", limit=5)
    assert error is None
    assert users["total"] == 2

    topup, error = api.topup_user("user_2", 10)
    assert topup["balance"] == 260.75
    transactions, _ = api.list_user_transactions("user_2", type="topup")
    assert transactions["summary"]["total_topups"] >= 10

    deleted, error = api.delete_user("user_3")
    assert deleted is True
    _, error = api.get_user("user_3")
    assert error["status_code"] == 404


def test_campaign_and_webhook_crud(api):
    api.login("jane.smith@example.com", "user123")

    campaign, error = api.create_campaign(
        {"name": "Launch", "description": "Launch day", "channel": "sms", "content": "We are live"}
    )
    assert error is None
    updated, _ = api.update_campaign(campaign["id"], {"status": "active"})
    assert updated["status"] == "active"
    result, _ = api.delete_campaign(campaign["id"])
    assert result == {"message": "Campaign deleted successfully"}

    webhook, _ = api.create_webhook({"url": "https://example.org/cb", "events": ["message.failed"]})
    ok, error = api.delete_webhook(webhook["id"])
    assert ok and error is None


def test_download_logs_returns_file(api):
    api.login("john.doe@example.com", "admin123")

    file, error = api.download_logs("csv", level="error")

    assert error is None
    assert file["filename"].endswith(".csv")
    assert file["content"].startswith("ID,Timestamp,Level")


def test_impersonation_swaps_token(api):
    api.login("john.doe@example.com", "admin123")
    admin_token = api.token

    session, _ = api.impersonate("user_2")
    assert api.token == session["token"] != admin_token
    assert api.me()[0]["isImpersonating"] is True

    api.stop_impersonation()
    assert api.me()[0]["id"] == "user_1"


def test_logout_clears_token(api):
    api.login("john.doe@example.com", "admin123")
    _, error = api.logout()

    assert error is None
    assert api.token is None


def test_network_errors_are_reported():
    api = AdminAPIClient("http://localhost:1", session=OfflineSession())

    data, error = api.get_metrics()

    assert data is None
    assert error["status_code"] is None
    assert "connection refused" in error["message"]
