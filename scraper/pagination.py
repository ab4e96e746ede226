"""
Paginated search: drive fetch + extraction across result pages 1..max_pages.

One browser session is reused for every page of a search call. Pages are
fetched strictly one after another. A page that yields nothing (including one
that failed to load after retries) ends the search; it never raises.
"""

from __future__ import annotations

import asyncio
from typing import Optional
from urllib.parse import quote

from scraper.browser import BrowserConfig, BrowserSession, default_browser_config, open_session
from scraper.constants import (
    DEFAULT_MAX_PAGES,
    INTER_PAGE_DELAY_SECONDS,
    NAV_TIMEOUT_MS,
    ORIGIN,
    SEARCH_PATH,
)
from scraper.extraction import PlaywrightNode, extract_products
from scraper.fetcher import fetch_page
from scraper.models import ExtractionReport, Product, SearchOutcome, SearchState, StopReason
from shared.logging import get_logger

logger = get_logger(__name__)

# Characters encodeURIComponent leaves alone, besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_search_url(query: str, page_number: int, *, origin: str = ORIGIN) -> str:
    """Search URL for one result page, with the query percent-encoded."""
    encoded = quote(query, safe=_URI_COMPONENT_SAFE)
    return f"{origin}{SEARCH_PATH}?k={encoded}&page={page_number}"


async def _harvest_page(
    session: BrowserSession,
    url: str,
    page_number: int,
    origin: str,
) -> Optional[ExtractionReport]:
    """Fetch and extract one page; None when either step failed."""
    try:
        page = await fetch_page(session, url, timeout_ms=NAV_TIMEOUT_MS)
        return await extract_products(PlaywrightNode(page), origin=origin)
    except Exception as e:
        logger.warning(
            "search.page_failed",
            page_number=page_number,
            url=url,
            error=str(e),
            error_type=type(e).__name__,
        )
        return None


def _enter_state(outcome: SearchOutcome, state: SearchState, **fields) -> SearchState:
    outcome.state_history.append(state)
    logger.debug("search.state_changed", state=state.value, **fields)
    return state


async def search_products(
    query: str,
    max_pages: int = DEFAULT_MAX_PAGES,
    *,
    config: Optional[BrowserConfig] = None,
    origin: str = ORIGIN,
    inter_page_delay: float = INTER_PAGE_DELAY_SECONDS,
) -> SearchOutcome:
    """
    Run a paginated search and report how it ended.

    Stops at the first page with zero candidates (StopReason.EXHAUSTED) or
    after `max_pages` pages (StopReason.EXHAUSTED_MAX_PAGES). Only a browser
    launch failure propagates; per-page failures count as empty pages.
    """
    if max_pages < 1:
        raise ValueError(f"max_pages must be >= 1, got {max_pages}")

    config = config or default_browser_config()
    outcome = SearchOutcome()
    logger.info("search.started", query=query, max_pages=max_pages)

    async with open_session(config) as session:
        for page_number in range(1, max_pages + 1):
            state = _enter_state(outcome, SearchState.FETCHING, page_number=page_number)
            url = build_search_url(query, page_number, origin=origin)
            logger.info(
                "search.page_started",
                state=state.value,
                page_number=page_number,
                url=url,
            )

            report = await _harvest_page(session, url, page_number, origin)
            outcome.pages_fetched += 1
            if report is None:
                outcome.failed_pages.append(page_number)
                report = ExtractionReport()

            _enter_state(
                outcome,
                SearchState.ACCUMULATING,
                page_number=page_number,
                candidates=report.candidates_accepted,
            )
            outcome.containers_seen += report.containers_seen
            outcome.products.extend(report.products)

            if not report.products:
                logger.info("search.page_empty", page_number=page_number)
                outcome.stop_reason = StopReason.EXHAUSTED
                break

            if page_number < max_pages:
                await asyncio.sleep(inter_page_delay)
        else:
            outcome.stop_reason = StopReason.EXHAUSTED_MAX_PAGES

    state = _enter_state(outcome, SearchState.STOPPED)
    logger.info(
        "search.stopped",
        state=state.value,
        query=query,
        stop_reason=outcome.stop_reason.value if outcome.stop_reason else None,
        pages_fetched=outcome.pages_fetched,
        failed_pages=outcome.failed_pages,
        containers_seen=outcome.containers_seen,
        candidates_accepted=outcome.candidates_accepted,
    )
    return outcome


async def search(
    query: str,
    max_pages: int = DEFAULT_MAX_PAGES,
    *,
    config: Optional[BrowserConfig] = None,
    origin: str = ORIGIN,
) -> list[Product]:
    """Products for `query` across up to `max_pages` result pages, in page order."""
    outcome = await search_products(query, max_pages, config=config, origin=origin)
    return outcome.products
