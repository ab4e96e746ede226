"""
Browser session lifecycle: one Playwright driver, one Chromium process, one page.

A session is owned by exactly one search or describe call and is released on
every exit path through `open_session`.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional

from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright

from scraper.constants import (
    LAUNCH_ARGS,
    LAUNCH_TIMEOUT_MS,
    PROTOCOL_TIMEOUT_MS,
    USER_AGENT,
)
from shared.config import AppConfig, get_config
from shared.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class BrowserConfig:
    """
    Fixed launch options, built once and passed into every session acquisition.

    None of these values come from user input; only the executable path and
    headless flag may be overridden through the environment.
    """

    headless: bool = True
    executable_path: Optional[str] = None
    launch_args: tuple[str, ...] = LAUNCH_ARGS
    launch_timeout_ms: int = LAUNCH_TIMEOUT_MS
    protocol_timeout_ms: int = PROTOCOL_TIMEOUT_MS
    user_agent: str = USER_AGENT
    # (width, height); None keeps the browser window size.
    viewport: Optional[tuple[int, int]] = None

    @classmethod
    def from_app_config(cls, config: AppConfig) -> "BrowserConfig":
        return cls(
            headless=config.browser_headless,
            executable_path=config.browser_executable_path,
        )


def default_browser_config() -> BrowserConfig:
    """BrowserConfig derived from the current environment."""
    return BrowserConfig.from_app_config(get_config())


class BrowserSession:
    """Handles for one acquired browser. close() is safe to call more than once."""

    def __init__(
        self,
        playwright: Playwright,
        browser: Optional[Browser] = None,
        context: Optional[BrowserContext] = None,
        page: Optional[Page] = None,
    ) -> None:
        self.playwright = playwright
        self.browser = browser
        self.context = context
        self.page = page
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        """
        Release the browser process and the Playwright driver.

        Absent handles are skipped. Errors from a process that already exited
        are logged and not raised, so cleanup never masks the caller's error.
        """
        if self._closed:
            return
        self._closed = True

        if self.browser is not None:
            try:
                await self.browser.close()
            except Exception as e:
                logger.warning("session.close_failed", resource="browser", error=str(e))

        if self.playwright is not None:
            try:
                await self.playwright.stop()
            except Exception as e:
                logger.warning("session.close_failed", resource="playwright", error=str(e))

        logger.debug("session.closed")


def _viewport_options(viewport: Optional[tuple[int, int]]) -> dict[str, Any]:
    if viewport is None:
        return {"no_viewport": True}
    width, height = viewport
    return {"viewport": {"width": width, "height": height}}


async def acquire_session(config: BrowserConfig) -> BrowserSession:
    """
    Start Playwright, launch Chromium and open a fresh context with one page.

    Launch failures propagate to the caller (no retry at this layer); anything
    started before the failure is released first.
    """
    playwright = await async_playwright().start()
    session = BrowserSession(playwright)
    try:
        session.browser = await playwright.chromium.launch(
            headless=config.headless,
            executable_path=config.executable_path,
            args=list(config.launch_args),
            timeout=config.launch_timeout_ms,
        )
        # Fresh context per session: no cookies, cache or history carried over.
        session.context = await session.browser.new_context(
            user_agent=config.user_agent,
            **_viewport_options(config.viewport),
        )
        session.context.set_default_timeout(config.protocol_timeout_ms)
        session.page = await session.context.new_page()
    except BaseException:
        await session.close()
        raise

    logger.debug(
        "session.acquired",
        headless=config.headless,
        executable_path=config.executable_path,
    )
    return session


@asynccontextmanager
async def open_session(config: BrowserConfig) -> AsyncIterator[BrowserSession]:
    """Acquire a session and close it exactly once, whatever happens inside."""
    session = await acquire_session(config)
    try:
        yield session
    finally:
        await session.close()
