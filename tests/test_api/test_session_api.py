"""Tests for the session endpoints in local and remote mode."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from ideaflow.app import app
from ideaflow.auth.session import Session
from ideaflow.config import get_settings
from ideaflow.storage.errors import ErrorKind, StoreError
from ideaflow.storage.remote import RemoteBackend


@pytest.fixture
def remote_client(monkeypatch):
    """TestClient in remote mode with the backend fetch stubbed out."""
    monkeypatch.setenv("STORAGE_BACKEND", "remote")
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    get_settings.cache_clear()
    with patch.object(RemoteBackend, "fetch_ideas", new_callable=AsyncMock) as mock_fetch:
        mock_fetch.return_value = []
        with TestClient(app) as test_client:
            yield test_client
    get_settings.cache_clear()


def test_local_mode_starts_signed_in(local_client: TestClient):
    response = local_client.get("/session")
    assert response.status_code == 200
    assert response.json() == {"user_id": "local", "email": None, "state": "ready", "ideas": 0}


def test_sign_out_empties_and_blocks_writes(local_client: TestClient):
    local_client.post("/ideas", json={"title": "Before sign-out"})

    response = local_client.delete("/session")
    assert response.status_code == 204

    assert local_client.get("/ideas").json() == {"ideas": [], "count": 0}
    assert local_client.get("/session").status_code == 401
    blocked = local_client.post("/ideas", json={"title": "Nope"})
    assert blocked.status_code == 401
    assert blocked.json() == {"error": "unauthorized", "detail": "No active session"}


def test_sign_in_again_restores_ideas(local_client: TestClient):
    local_client.post("/ideas", json={"title": "Persisted"})
    local_client.delete("/session")

    response = local_client.post("/session", json={})

    assert response.status_code == 200
    assert response.json()["ideas"] == 1
    assert local_client.get("/ideas").json()["count"] == 1


def test_remote_starts_signed_out(remote_client: TestClient):
    assert remote_client.get("/session").status_code == 401
    assert remote_client.get("/ideas").json()["count"] == 0


def test_remote_sign_in_verifies_token(remote_client: TestClient):
    with patch("ideaflow.api.session.verify_access_token", new_callable=AsyncMock) as mock_verify:
        mock_verify.return_value = Session(
            user_id="user-1", email="me@example.com", access_token="jwt-token"
        )
        response = remote_client.post("/session", json={"access_token": "jwt-token"})

    assert response.status_code == 200
    assert response.json()["user_id"] == "user-1"
    assert response.json()["state"] == "ready"
    mock_verify.assert_awaited_once_with("jwt-token")


def test_remote_sign_in_rejected_token(remote_client: TestClient):
    with patch("ideaflow.api.session.verify_access_token", new_callable=AsyncMock) as mock_verify:
        mock_verify.side_effect = StoreError(ErrorKind.UNAUTHORIZED, "Backend rejected request with HTTP 401")
        response = remote_client.post("/session", json={"access_token": "bad"})

    assert response.status_code == 401
    assert response.json()["error"] == "unauthorized"
    assert remote_client.get("/session").status_code == 401
