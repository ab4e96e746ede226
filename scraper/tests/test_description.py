"""
Unit tests for product descriptions: primary region, feature-bullet fallback,
sentinel, and failure downgrade to an empty string.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from scraper.browser import BrowserConfig
from scraper.constants import DESCRIPTION_NAV_TIMEOUT_MS, NO_DESCRIPTION
from scraper.description import describe, extract_description

URL = "https://www.amazon.in/dp/B01"


# --- extract_description ---


@pytest.mark.asyncio
async def test_primary_region_preferred(make_node):
    document = make_node(
        children={
            "#productDescription": [make_node(text="  Ergonomic 2.4 GHz mouse.  ")],
            "#feature-bullets ul": [make_node(text="Bullet text")],
        }
    )
    assert await extract_description(document) == "Ergonomic 2.4 GHz mouse."


@pytest.mark.asyncio
async def test_feature_bullets_fallback(make_node):
    document = make_node(
        children={"#feature-bullets ul": [make_node(text="Silent clicks\n18-month battery")]}
    )
    assert await extract_description(document) == "Silent clicks\n18-month battery"


@pytest.mark.asyncio
async def test_neither_region_returns_sentinel(make_node):
    assert await extract_description(make_node()) == NO_DESCRIPTION
    assert NO_DESCRIPTION == "no description available"


@pytest.mark.asyncio
async def test_empty_region_returns_empty_text(make_node):
    document = make_node(children={"#productDescription": [make_node(text=None)]})
    assert await extract_description(document) == ""


# --- describe ---


@pytest.mark.asyncio
async def test_describe_without_regions_returns_sentinel(fake_session, make_node):
    with (
        patch("scraper.browser.acquire_session", AsyncMock(return_value=fake_session)),
        patch("scraper.description.fetch_page", new_callable=AsyncMock) as fetch,
        patch(
            "scraper.description.extract_description",
            AsyncMock(return_value=NO_DESCRIPTION),
        ),
    ):
        result = await describe(URL, config=BrowserConfig())

    assert result == NO_DESCRIPTION
    fetch.assert_awaited_once()
    assert fetch.await_args.kwargs == {"timeout_ms": DESCRIPTION_NAV_TIMEOUT_MS, "retry": False}
    fake_session.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_describe_returns_region_text(fake_session, fake_page):
    region = AsyncMock()
    region.inner_text = AsyncMock(return_value="Feature bullets")
    fake_page.query_selector = AsyncMock(side_effect=[None, region])

    with patch("scraper.browser.acquire_session", AsyncMock(return_value=fake_session)):
        result = await describe(URL, config=BrowserConfig())

    assert result == "Feature bullets"
    fake_page.goto.assert_awaited_once()
    fake_session.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_describe_navigation_failure_returns_empty_not_sentinel(fake_session, fake_page):
    fake_page.goto = AsyncMock(side_effect=PlaywrightTimeoutError("Timeout 60000ms exceeded"))

    with patch("scraper.browser.acquire_session", AsyncMock(return_value=fake_session)):
        result = await describe(URL, config=BrowserConfig())

    assert result == ""
    assert result != NO_DESCRIPTION
    # No retry wrapper for descriptions.
    assert fake_page.goto.await_count == 1
    fake_session.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_describe_evaluation_failure_returns_empty(fake_session):
    with (
        patch("scraper.browser.acquire_session", AsyncMock(return_value=fake_session)),
        patch("scraper.description.fetch_page", new_callable=AsyncMock),
        patch(
            "scraper.description.extract_description",
            AsyncMock(side_effect=RuntimeError("Target closed")),
        ),
    ):
        result = await describe(URL, config=BrowserConfig())

    assert result == ""
    fake_session.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_describe_launch_failure_propagates():
    with patch(
        "scraper.browser.acquire_session",
        AsyncMock(side_effect=RuntimeError("Failed to launch browser")),
    ):
        with pytest.raises(RuntimeError):
            await describe(URL, config=BrowserConfig())
