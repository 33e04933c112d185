"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from cpaas_admin_api.app.core.config import Settings
from cpaas_admin_api.app.main import create_app


@pytest.fixture
def settings():
    """Settings with a small mock dataset so each app builds quickly."""
    return Settings(
        secret_key="test-secret",
        mock_seed=7,
        mock_log_count=120,
        mock_message_log_count=80,
        mock_transactions_per_user=30,
        debug=True,
    )


@pytest.fixture
def app(settings):
    """A freshly seeded application per test."""
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def repositories(app):
    return app.state.repositories


def _login(client, email, password):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def admin_token(client):
    return _login(client, "john.doe@example.com", "admin123")


@pytest.fixture
def user_token(client):
    return _login(client, "jane.smith@example.com", "user123")


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def user_headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}
