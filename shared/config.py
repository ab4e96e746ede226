"""
Environment-based configuration for the product scraper.

This module exposes a small, typed configuration surface shared by the
scraping engine, the HTTP shim and the CLI. All values are sourced from
environment variables with sensible, non-secret defaults.

Local development can provide a `.env` file; entry points load it with
python-dotenv before calling `get_config()`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, Optional

Environment = Literal["local", "dev", "staging", "prod"]

DEFAULT_ORIGIN = "https://www.amazon.in"


@dataclass(frozen=True)
class AppConfig:
    """
    Top-level application configuration.

    Browser launch options that are not listed here (sandbox flags, timeouts,
    user agent) are fixed and live in `scraper.browser.BrowserConfig`.
    """

    environment: Environment
    log_level: str

    # Optional file path for structured JSON logs; when set, logs are written
    # to file (and stdout if log_stdout).
    log_file: Optional[str]
    # When True, logs go to stdout. When False, only file (if LOG_FILE set). Default True.
    log_stdout: bool

    # Browser executable override (Chromium/Chrome binary path).
    browser_executable_path: Optional[str]
    browser_headless: bool

    # Site origin used for search URLs and link absolutization.
    origin: str

    # HTTP shim
    max_concurrent_sessions: int
    port: int

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Construct configuration from environment variables.

        All fields have defaults suitable for local development.
        """

        environment = os.getenv("APP_ENV", "local")

        if environment not in {"local", "dev", "staging", "prod"}:
            raise ValueError(f"Unsupported APP_ENV value: {environment!r}")

        def _bool_env(name: str, default: bool) -> bool:
            raw = (os.getenv(name) or str(default)).strip().lower()
            return raw in ("true", "1", "yes")

        def _positive_int_env(name: str, default: int) -> int:
            raw = (os.getenv(name) or "").strip()
            try:
                value = int(raw)
            except ValueError:
                return default
            return value if value > 0 else default

        # PUPPETEER_EXECUTABLE_PATH is honoured so existing container images keep working.
        executable_path = (
            os.getenv("BROWSER_EXECUTABLE_PATH")
            or os.getenv("PUPPETEER_EXECUTABLE_PATH")
            or None
        )

        return cls(
            environment=environment,  # type: ignore[arg-type]
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE") or None,
            log_stdout=_bool_env("LOG_STDOUT", True),
            browser_executable_path=executable_path,
            browser_headless=_bool_env("BROWSER_HEADLESS", True),
            origin=(os.getenv("SCRAPER_ORIGIN") or DEFAULT_ORIGIN).rstrip("/"),
            max_concurrent_sessions=_positive_int_env("MAX_CONCURRENT_SESSIONS", 2),
            port=_positive_int_env("PORT", 8080),
        )


def get_config() -> AppConfig:
    """
    Helper to obtain the current configuration.

    In longer-lived processes, construct a single `AppConfig` at startup and
    pass it explicitly through your code.
    """

    return AppConfig.from_env()
