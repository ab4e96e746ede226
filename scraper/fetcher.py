"""
Page navigation: timeouts, network-idle wait, retry wrapper.

The fetcher lands the session's page on a URL and does not interpret content,
apart from a diagnostic check for challenge interstitials.
"""

from __future__ import annotations

from typing import Optional

from playwright.async_api import Page, Response

from scraper.browser import BrowserSession
from scraper.constants import BASE_DELAY_MS, BOT_BLOCK_INDICATORS, MAX_ATTEMPTS, NAV_TIMEOUT_MS
from scraper.retry import run_with_retry
from shared.logging import get_logger

logger = get_logger(__name__)


async def is_bot_block_page(page: Page) -> bool:
    """
    Detect a challenge/captcha interstitial from the page title and body text.

    Detection only; nothing here tries to get past the challenge.
    """
    try:
        title = await page.title()
        body_text = await page.inner_text("body")
        combined = f"{title} {body_text}".lower()
        return any(ind in combined for ind in BOT_BLOCK_INDICATORS)
    except Exception:
        return False


async def fetch_page(
    session: BrowserSession,
    url: str,
    *,
    timeout_ms: int = NAV_TIMEOUT_MS,
    retry: bool = True,
    max_attempts: int = MAX_ATTEMPTS,
    base_delay_ms: int = BASE_DELAY_MS,
) -> Page:
    """
    Navigate the session's page to `url` and wait for the network to settle.

    Each navigation attempt is bounded by `timeout_ms`. With `retry=True`
    transient failures (timeouts, connection resets) are retried with
    exponential backoff; the last error propagates once attempts run out.
    """
    page = session.page
    if page is None:
        raise RuntimeError("Browser session has no open page")

    page.set_default_navigation_timeout(timeout_ms)
    page.set_default_timeout(timeout_ms)

    async def _navigate() -> Optional[Response]:
        return await page.goto(url, wait_until="networkidle", timeout=timeout_ms)

    if retry:
        response = await run_with_retry(
            _navigate,
            max_attempts=max_attempts,
            base_delay_ms=base_delay_ms,
            operation="navigation",
        )
    else:
        response = await _navigate()

    logger.info(
        "fetch.navigated",
        url=url,
        status=response.status if response is not None else None,
    )

    if await is_bot_block_page(page):
        logger.warning("fetch.bot_block_suspected", url=url)

    return page
