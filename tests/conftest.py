"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from ideaflow.app import app
from ideaflow.config import get_settings


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app (lifespan not started)."""
    return TestClient(app)


@pytest.fixture
def local_client(tmp_path, monkeypatch):
    """TestClient running the full lifespan against a local blob in tmp_path."""
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("LOCAL_USER_ID", "local")
    get_settings.cache_clear()
    with TestClient(app) as test_client:
        yield test_client
    get_settings.cache_clear()
