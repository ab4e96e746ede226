"""
Playwright-based product scraping engine.

Two entry points: `search(query, max_pages)` walks paginated search results
and returns Product records; `describe(url)` returns a product page's
description text.

Public API: re-exports the symbols used by the HTTP shim, the CLI and tests
so that `from scraper import ...` is enough.
"""

from __future__ import annotations

from scraper.browser import (
    BrowserConfig,
    BrowserSession,
    acquire_session,
    default_browser_config,
    open_session,
)
from scraper.constants import (
    DEFAULT_MAX_PAGES,
    INTER_PAGE_DELAY_SECONDS,
    NO_DESCRIPTION,
    ORIGIN,
)
from scraper.description import describe, extract_description
from scraper.extraction import (
    DomNode,
    PlaywrightNode,
    absolutize_link,
    extract_candidate,
    extract_products,
)
from scraper.fetcher import fetch_page, is_bot_block_page
from scraper.models import (
    ExtractionReport,
    Product,
    SearchOutcome,
    SearchState,
    StopReason,
)
from scraper.pagination import build_search_url, search, search_products
from scraper.retry import backoff_delay_seconds, run_with_retry

__all__ = [
    # constants
    "ORIGIN",
    "DEFAULT_MAX_PAGES",
    "INTER_PAGE_DELAY_SECONDS",
    "NO_DESCRIPTION",
    # models
    "Product",
    "ExtractionReport",
    "SearchOutcome",
    "SearchState",
    "StopReason",
    # browser
    "BrowserConfig",
    "BrowserSession",
    "acquire_session",
    "open_session",
    "default_browser_config",
    # retry
    "run_with_retry",
    "backoff_delay_seconds",
    # fetcher
    "fetch_page",
    "is_bot_block_page",
    # extraction
    "DomNode",
    "PlaywrightNode",
    "absolutize_link",
    "extract_candidate",
    "extract_products",
    # pagination
    "build_search_url",
    "search",
    "search_products",
    # description
    "extract_description",
    "describe",
]
