"""Tests for main application routes."""
from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


def test_root() -> None:
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "procurement-tracker-api"
    assert data["status"] == "running"


def test_security_headers() -> None:
    response = client.get("/")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_health_ok(monkeypatch) -> None:
    """Test health endpoint when DB is available."""
    from app.api.routes import health

    monkeypatch.setattr(health, "check_db_connection", lambda: True)

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "db": "ok"}


def test_health_degraded(monkeypatch) -> None:
    """Test health endpoint when DB is unavailable."""
    from app.api.routes import health

    monkeypatch.setattr(health, "check_db_connection", lambda: False)

    response = client.get("/health")
    assert response.status_code == 503
    data = response.json()
    assert data["detail"]["status"] == "degraded"
    assert data["detail"]["db"] == "error"
