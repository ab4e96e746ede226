"""
Pytest configuration and fixtures for API tests.

The scraping engine is patched in each test; no browser is launched.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from shared.config import AppConfig


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        environment="local",
        log_level="INFO",
        log_file=None,
        log_stdout=True,
        browser_executable_path=None,
        browser_headless=True,
        origin="https://www.amazon.in",
        max_concurrent_sessions=2,
        port=8080,
    )


@pytest.fixture
def client(app_config):
    """Create a FastAPI test client."""
    app = create_app(app_config)

    with TestClient(app) as test_client:
        yield test_client
