import pytest
from fastapi.testclient import TestClient

from lyric_journal_api.app.core.config import settings
from lyric_journal_api.app.main import app


@pytest.fixture
def store_path(tmp_path, monkeypatch):
    """Point the JSON store at a fresh file for each test."""
    path = tmp_path / "database.json"
    monkeypatch.setattr(settings, "database_file", str(path))
    return path


@pytest.fixture
def client(store_path):
    """TestClient inside its context manager so the lifespan runs."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user through the API and return its Authorization headers."""

    def _register(username: str, password: str = "secret1") -> dict:
        response = client.post("/api/register", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register
