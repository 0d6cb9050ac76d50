"""
File: tests/conftest.py
Purpose: Shared fixtures: clean environment and a fresh app (own metric registry) per test.
"""

import pytest
from fastapi.testclient import TestClient

from probe_api.config import get_settings
from probe_api.main import create_app


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every test in test mode with no fault/version overrides."""
    monkeypatch.setenv("ENV", "test")
    monkeypatch.delenv("FAULT", raising=False)
    monkeypatch.delenv("APP_VERSION", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def registry(app):
    return app.state.prom_registry
