"""
File: tests/test_smoke.py
Purpose: Endpoint smoke tests for /healthz, /api/version, /api/fault and /metrics.
"""

from fastapi.testclient import TestClient

from probe_api.config import Settings, get_settings
from probe_api.main import create_app


def test_healthz_ok(client):
    """Verify health endpoint returns ok."""
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_version_default(client):
    """APP_VERSION unset reports 1.0.0."""
    r = client.get("/api/version")
    assert r.status_code == 200
    assert r.json() == {"version": "1.0.0"}


def test_version_from_env(client, monkeypatch):
    monkeypatch.setenv("APP_VERSION", "2.3.4")
    get_settings.cache_clear()
    assert client.get("/api/version").json() == {"version": "2.3.4"}


def test_version_empty_falls_back(client, monkeypatch):
    monkeypatch.setenv("APP_VERSION", "")
    get_settings.cache_clear()
    assert client.get("/api/version").json() == {"version": "1.0.0"}


def test_fault_disabled(client):
    """FAULT unset answers ok."""
    r = client.get("/api/fault")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_fault_enabled(client, monkeypatch):
    """FAULT=1 answers 500 with the injected fault body."""
    monkeypatch.setenv("FAULT", "1")
    get_settings.cache_clear()
    r = client.get("/api/fault")
    assert r.status_code == 500
    assert r.json() == {"error": "Injected fault"}


def test_fault_only_enabled_by_one(client, monkeypatch):
    monkeypatch.setenv("FAULT", "true")
    get_settings.cache_clear()
    assert client.get("/api/fault").status_code == 200


def test_metrics_text_plain(client):
    """Verify /metrics returns Prometheus text after a prior request."""
    client.get("/healthz")
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "text/plain" in r.headers["content-type"]
    lines = r.text.splitlines()
    assert any(line.startswith("http_request_duration_seconds_count") for line in lines)
    assert "# TYPE http_request_duration_seconds histogram" in lines
    assert any(line.startswith("# HELP http_request_duration_seconds ") for line in lines)


def test_metrics_include_default_collectors(client):
    assert "python_info" in client.get("/metrics").text


def test_injected_settings_reach_routes():
    """Settings given to create_app win over the environment."""
    c = TestClient(create_app(Settings(APP_VERSION="9.9.9", FAULT="1")))
    assert c.get("/api/version").json() == {"version": "9.9.9"}
    r = c.get("/api/fault")
    assert r.status_code == 500
    assert r.json() == {"error": "Injected fault"}
