"""
Tests for health check endpoints.
"""

from sqlalchemy.exc import OperationalError

from florist_api.main import app
from shared.infrastructure.db import get_db


def test_health_check(client):
    """Test basic health check endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "florist-api"


def test_detailed_health_check(client):
    """Detailed check reports the database and the operating zone."""
    response = client.get("/api/health/detailed")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["dependencies"]["database"]["status"] == "healthy"
    assert data["timezone"] == "Asia/Singapore"


def test_detailed_health_check_database_down(client):
    """An unreachable database turns the detailed check into a 503."""

    class BrokenSession:
        def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    app.dependency_overrides[get_db] = lambda: BrokenSession()

    response = client.get("/api/health/detailed")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"


def test_request_id_is_echoed(client):
    response = client.get("/api/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"
