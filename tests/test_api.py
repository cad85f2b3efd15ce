"""Tests for API functionality."""

import pytest

pytest.importorskip("fastapi")

from fastapi.testclient import TestClient  # noqa: E402

from md2adf import __version__  # noqa: E402
from md2adf.api.app import create_app, generate_token  # noqa: E402
from md2adf.runtime import build_runtime  # noqa: E402


@pytest.fixture
def runtime(tmp_path, monkeypatch):
    """Create a runtime with default config."""
    monkeypatch.chdir(tmp_path)
    return build_runtime()


@pytest.fixture
def client(runtime):
    return TestClient(create_app(runtime, token=None))


def test_health_endpoint(client):
    """Test /health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == __version__


def test_auth_required(runtime):
    """Test that endpoints require authentication when token is set."""
    token = generate_token()
    app = create_app(runtime, token=token)
    client = TestClient(app)

    # Without token should get 401
    response = client.get("/health")
    assert response.status_code == 401

    response = client.get("/health", headers={"Authorization": "Bearer wrong"})
    assert response.status_code == 401

    # With token should work
    response = client.get("/health", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_convert_endpoint(client):
    """Test /convert with a mention."""
    response = client.post("/convert", json={"markdown": "**Hi** @[abc123:Jane Doe]"})
    assert response.status_code == 200
    data = response.json()
    assert data["version"] == 1
    assert data["content"][0]["content"] == [
        {"type": "text", "text": "Hi", "marks": [{"type": "strong"}]},
        {"type": "text", "text": " "},
        {"type": "mention", "attrs": {"id": "abc123", "text": "@Jane Doe", "userType": "APP"}},
    ]


def test_convert_endpoint_options(client):
    """Test per-request option overrides."""
    response = client.post(
        "/convert", json={"markdown": "Hi @[abc123:Jane]", "mentions": False}
    )
    assert response.json()["content"][0]["content"] == [
        {"type": "text", "text": "Hi @[abc123:Jane]"}
    ]

    response = client.post("/convert", json={"markdown": "a *b", "detect": True})
    assert response.json()["content"][0]["content"] == [{"type": "text", "text": "a *b"}]


def test_convert_endpoint_empty(client):
    """Test blank input gives an empty document."""
    response = client.post("/convert", json={"markdown": "   "})
    assert response.json() == {"version": 1, "type": "doc", "content": []}


def test_detect_endpoint(client):
    """Test /detect."""
    assert client.post("/detect", json={"text": "## T"}).json() == {"markdown": True}
    assert client.post("/detect", json={"text": "plain"}).json() == {"markdown": False}


def test_body_endpoint(client):
    """Test /body for strings and objects."""
    doc = {"version": 1, "type": "doc", "content": []}
    assert client.post("/body", json={"body": doc}).json() == doc

    response = client.post("/body", json={"body": "just text"})
    assert response.status_code == 200
    assert response.json()["content"][0]["content"] == [{"type": "text", "text": "just text"}]


def test_body_endpoint_rejects_invalid_adf(client):
    """Test invalid ADF gives 422."""
    response = client.post("/body", json={"body": {"type": "paragraph"}})
    assert response.status_code == 422
    assert "ADF" in response.json()["detail"]


def test_mentions_endpoint(client):
    """Test /mentions skips code."""
    response = client.post("/mentions", json={"text": "@[aa:Ann] `@[bb:Bob]`"})
    assert response.status_code == 200
    assert response.json() == [{"id": "aa", "text": "@Ann"}]
