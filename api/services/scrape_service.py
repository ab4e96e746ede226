"""
Scrape service: bounds concurrent browser sessions and calls the engine.

The engine itself places no limit on concurrent calls; every search or
describe launches its own browser. This service is where the HTTP layer caps
that with a semaphore.
"""

from __future__ import annotations

import asyncio

from scraper import BrowserConfig, Product, describe, search
from shared.config import AppConfig


class ScrapeService:
    """Thin wrapper around the scraping engine for request handlers."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self.browser_config = BrowserConfig.from_app_config(config)
        self._sessions = asyncio.Semaphore(config.max_concurrent_sessions)

    async def search_products(self, query: str, max_pages: int) -> list[Product]:
        async with self._sessions:
            return await search(
                query,
                max_pages,
                config=self.browser_config,
                origin=self.config.origin,
            )

    async def describe_product(self, url: str) -> str:
        async with self._sessions:
            return await describe(url, config=self.browser_config)
