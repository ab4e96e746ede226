"""
Search result extraction: map result containers to Product records.

Extraction runs against a narrow DOM capability (`DomNode`) rather than raw
Playwright handles, so the field mapping can be exercised without a browser.
Incomplete containers are dropped silently; markup drift therefore shows up
as a low `candidates_accepted` against `containers_seen`, never as an error.
"""

from __future__ import annotations

from typing import Optional, Protocol, Union

from playwright.async_api import ElementHandle, Page

from scraper.constants import (
    IMAGE_SELECTOR,
    LINK_SELECTOR,
    ORIGIN,
    PRICE_SELECTOR,
    RESULT_ITEM_SELECTOR,
    TITLE_SELECTOR,
)
from scraper.models import ExtractionReport, Product
from scraper.text import clean_field
from shared.logging import get_logger

logger = get_logger(__name__)


class DomNode(Protocol):
    """Read-only view of a rendered element (or the document root)."""

    async def query(self, selector: str) -> Optional["DomNode"]: ...

    async def query_all(self, selector: str) -> list["DomNode"]: ...

    async def text(self) -> Optional[str]: ...

    async def attribute(self, name: str) -> Optional[str]: ...

    async def resolved_src(self) -> Optional[str]: ...


class PlaywrightNode:
    """DomNode backed by a Playwright Page (document root) or ElementHandle."""

    def __init__(self, handle: Union[Page, ElementHandle]) -> None:
        self._handle = handle

    async def query(self, selector: str) -> Optional["PlaywrightNode"]:
        found = await self._handle.query_selector(selector)
        return PlaywrightNode(found) if found is not None else None

    async def query_all(self, selector: str) -> list["PlaywrightNode"]:
        return [PlaywrightNode(h) for h in await self._handle.query_selector_all(selector)]

    async def text(self) -> Optional[str]:
        return await self._handle.inner_text()

    async def attribute(self, name: str) -> Optional[str]:
        return await self._handle.get_attribute(name)

    async def resolved_src(self) -> Optional[str]:
        # The src property, unlike the attribute, is resolved against the page URL.
        prop = await self._handle.get_property("src")
        value = await prop.json_value()
        return value if isinstance(value, str) else None


def absolutize_link(href: Optional[str], origin: str = ORIGIN) -> Optional[str]:
    """
    Make a result link absolute.

    Site-relative hrefs ("/dp/XYZ") are prefixed with the origin and otherwise
    left untouched. Anything else (absolute URLs, "#", "javascript:", bare
    paths) passes through unmodified; blank hrefs give None.
    """
    if href is None:
        return None
    href = href.strip()
    if not href:
        return None
    if href.startswith(("http://", "https://")):
        return href
    if href.startswith("//"):
        return f"https:{href}"
    if href.startswith("/"):
        return f"{origin}{href}"
    return href


async def extract_candidate(container: DomNode, *, origin: str = ORIGIN) -> Optional[Product]:
    """
    Map one result container to a Product, or None when it is incomplete.

    title, price and image_url are required. A missing link anchor is
    tolerated and leaves link as None.
    """
    title_node = await container.query(TITLE_SELECTOR)
    price_node = await container.query(PRICE_SELECTOR)
    image_node = await container.query(IMAGE_SELECTOR)
    link_node = await title_node.query(LINK_SELECTOR) if title_node is not None else None

    title = clean_field(await title_node.text()) if title_node is not None else None
    price = clean_field(await price_node.text()) if price_node is not None else None
    image_url = clean_field(await image_node.resolved_src()) if image_node is not None else None

    if not (title and price and image_url):
        return None

    link = None
    if link_node is not None:
        link = absolutize_link(await link_node.attribute("href"), origin)

    return Product(title=title, price=price, image_url=image_url, link=link)


async def extract_products(document: DomNode, *, origin: str = ORIGIN) -> ExtractionReport:
    """Harvest products from a rendered results page, in document order."""
    containers = await document.query_all(RESULT_ITEM_SELECTOR)
    report = ExtractionReport(containers_seen=len(containers))

    for container in containers:
        product = await extract_candidate(container, origin=origin)
        if product is not None:
            report.products.append(product)

    logger.info(
        "extraction.summary",
        containers_seen=report.containers_seen,
        candidates_accepted=report.candidates_accepted,
        candidates_dropped=report.candidates_dropped,
    )
    return report
