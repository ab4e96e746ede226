"""
Shared fixtures for scraper tests: an in-memory DOM and a fake browser session.

No Playwright browser or network is required by any scraper test.
"""

from __future__ import annotations

from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest


class FakeNode:
    """
    In-memory DomNode. `children` maps a selector to the nodes it matches.
    """

    def __init__(
        self,
        text: Optional[str] = None,
        attrs: Optional[dict] = None,
        src: Optional[str] = None,
        children: Optional[dict] = None,
    ) -> None:
        self._text = text
        self._attrs = attrs or {}
        self._src = src
        self._children = children or {}

    async def query(self, selector: str):
        found = self._children.get(selector) or []
        return found[0] if found else None

    async def query_all(self, selector: str):
        return list(self._children.get(selector) or [])

    async def text(self):
        return self._text

    async def attribute(self, name: str):
        return self._attrs.get(name)

    async def resolved_src(self):
        return self._src


def result_item(
    title: Optional[str] = "Wireless Mouse",
    price: Optional[str] = "499",
    image: Optional[str] = "https://m.media-amazon.com/images/I/mouse.jpg",
    href: Optional[str] = "/dp/B000000001",
) -> FakeNode:
    """Build one `.s-result-item` container; pass None to omit a field element."""
    children = {}
    if title is not None:
        title_children = {}
        if href is not None:
            title_children["a"] = [FakeNode(attrs={"href": href})]
        children["h2"] = [FakeNode(text=title, children=title_children)]
    if price is not None:
        children[".a-price-whole"] = [FakeNode(text=price)]
    if image is not None:
        children[".s-image"] = [FakeNode(src=image)]
    return FakeNode(children=children)


def results_document(items: list) -> FakeNode:
    """Document root whose results region holds `items`."""
    return FakeNode(children={".s-main-slot .s-result-item": items})


@pytest.fixture
def fake_page():
    """Playwright Page double: async navigation, sync timeout setters."""
    page = AsyncMock()
    page.set_default_timeout = MagicMock()
    page.set_default_navigation_timeout = MagicMock()
    response = MagicMock()
    response.status = 200
    page.goto = AsyncMock(return_value=response)
    page.title = AsyncMock(return_value="Amazon.in : wireless mouse")
    page.inner_text = AsyncMock(return_value="Results")
    return page


@pytest.fixture
def fake_session(fake_page):
    """BrowserSession double whose close() is observable."""
    session = MagicMock()
    session.page = fake_page
    session.close = AsyncMock()
    return session


@pytest.fixture
def make_node():
    return FakeNode


@pytest.fixture
def make_item():
    return result_item


@pytest.fixture
def make_document():
    return results_document
