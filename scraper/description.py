"""
Product description: single-page fetch with a fallback locator.
"""

from __future__ import annotations

from typing import Optional

from scraper.browser import BrowserConfig, default_browser_config, open_session
from scraper.constants import (
    DESCRIPTION_NAV_TIMEOUT_MS,
    DESCRIPTION_SELECTOR,
    FEATURE_BULLETS_SELECTOR,
    NO_DESCRIPTION,
)
from scraper.extraction import DomNode, PlaywrightNode
from scraper.fetcher import fetch_page
from shared.logging import get_logger

logger = get_logger(__name__)


async def extract_description(document: DomNode) -> str:
    """Description region text, the feature bullets, or the NO_DESCRIPTION sentinel."""
    region = await document.query(DESCRIPTION_SELECTOR)
    if region is None:
        region = await document.query(FEATURE_BULLETS_SELECTOR)
    if region is None:
        return NO_DESCRIPTION
    text = await region.text()
    return (text or "").strip()


async def describe(
    url: str,
    *,
    config: Optional[BrowserConfig] = None,
    timeout_ms: int = DESCRIPTION_NAV_TIMEOUT_MS,
) -> str:
    """
    Fetch the description text of one product page.

    Never raises for navigation or evaluation problems: those are logged and
    give an empty string, which is distinct from NO_DESCRIPTION. A browser
    launch failure still propagates.
    """
    config = config or default_browser_config()
    description = ""

    async with open_session(config) as session:
        try:
            page = await fetch_page(session, url, timeout_ms=timeout_ms, retry=False)
            description = await extract_description(PlaywrightNode(page))
        except Exception as e:
            logger.error(
                "describe.failed",
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )

    logger.info(
        "describe.completed",
        url=url,
        found=description not in ("", NO_DESCRIPTION),
        length=len(description),
    )
    return description
