"""
Tests for environment configuration consumed by the scraper.
"""

from __future__ import annotations

import pytest

from scraper.browser import BrowserConfig, default_browser_config
from shared.config import DEFAULT_ORIGIN, AppConfig

_ENV_VARS = (
    "APP_ENV",
    "BROWSER_EXECUTABLE_PATH",
    "PUPPETEER_EXECUTABLE_PATH",
    "BROWSER_HEADLESS",
    "SCRAPER_ORIGIN",
    "MAX_CONCURRENT_SESSIONS",
    "PORT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    config = AppConfig.from_env()

    assert config.environment == "local"
    assert config.browser_executable_path is None
    assert config.browser_headless is True
    assert config.origin == DEFAULT_ORIGIN
    assert config.max_concurrent_sessions == 2
    assert config.port == 8080


def test_puppeteer_executable_path_is_honoured(clean_env):
    clean_env.setenv("PUPPETEER_EXECUTABLE_PATH", "/usr/bin/chromium-browser")

    assert AppConfig.from_env().browser_executable_path == "/usr/bin/chromium-browser"
    assert default_browser_config().executable_path == "/usr/bin/chromium-browser"


def test_browser_executable_path_wins(clean_env):
    clean_env.setenv("PUPPETEER_EXECUTABLE_PATH", "/usr/bin/chromium-browser")
    clean_env.setenv("BROWSER_EXECUTABLE_PATH", "/opt/chrome/chrome")

    assert AppConfig.from_env().browser_executable_path == "/opt/chrome/chrome"


def test_origin_trailing_slash_stripped(clean_env):
    clean_env.setenv("SCRAPER_ORIGIN", "https://www.amazon.com/")

    assert AppConfig.from_env().origin == "https://www.amazon.com"


def test_invalid_numbers_fall_back(clean_env):
    clean_env.setenv("MAX_CONCURRENT_SESSIONS", "0")
    clean_env.setenv("PORT", "not-a-port")

    config = AppConfig.from_env()
    assert config.max_concurrent_sessions == 2
    assert config.port == 8080


def test_unknown_app_env_fails_fast(clean_env):
    clean_env.setenv("APP_ENV", "qa")

    with pytest.raises(ValueError):
        AppConfig.from_env()


def test_headless_can_be_disabled(clean_env):
    clean_env.setenv("BROWSER_HEADLESS", "false")

    assert default_browser_config() == BrowserConfig(headless=False)
