"""
Tests for the liveness and detailed health checks.
"""

from test_fixtures import client
from adapters import mongo_adapter
from api.routes import health
from app.config import settings


def test_health_check():
    r = client.get("/api/health")

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["environment"] == "testing"
    assert body["uptime"] >= 0
    assert "X-Request-ID" in r.headers


def test_request_id_is_echoed():
    r = client.get("/api/health", headers={"X-Request-ID": "trace-123"})
    assert r.headers["X-Request-ID"] == "trace-123"


def test_detailed_health_all_good(monkeypatch):
    monkeypatch.setattr(health, "check_connection", lambda: True)
    monkeypatch.setattr(mongo_adapter, "is_connected", lambda: True)
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")

    r = client.get("/api/health/detailed")

    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["checks"]["environment"] == {"JWT_SECRET": True, "OPENAI_API_KEY": True}


def test_detailed_health_reports_failures(monkeypatch):
    monkeypatch.setattr(health, "check_connection", lambda: True)
    monkeypatch.setattr(mongo_adapter, "is_connected", lambda: False)

    r = client.get("/api/health/detailed")

    assert r.status_code == 503
    body = r.json()
    assert body["status"] == "unhealthy"
    assert body["checks"]["mongodb"]["status"] == "unhealthy"
    assert body["checks"]["database"]["status"] == "healthy"
    # no key is configured under test
    assert body["checks"]["environment"]["OPENAI_API_KEY"] is False


def test_default_jwt_secret_counts_as_missing(monkeypatch):
    monkeypatch.setattr(health, "check_connection", lambda: True)
    monkeypatch.setattr(mongo_adapter, "is_connected", lambda: True)
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    monkeypatch.setattr(settings, "jwt_secret", "change-me")

    r = client.get("/api/health/detailed")

    assert r.status_code == 503
    assert r.json()["checks"]["environment"]["JWT_SECRET"] is False
