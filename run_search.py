#!/usr/bin/env python3
"""
CLI script for running the scraper by hand.

Usage:
    python run_search.py --query "wireless mouse" [--pages 2] [--no-headless]
    python run_search.py --describe <product_url>
"""

import argparse
import asyncio
import json
from dataclasses import replace

from dotenv import load_dotenv

load_dotenv()

from scraper import BrowserConfig, describe, search_products
from shared.config import get_config
from shared.logging import configure_logging


async def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description="Scrape search results or a product description")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--query", help="Search term")
    target.add_argument("--describe", metavar="URL", help="Product page URL to describe")
    parser.add_argument("--pages", type=int, default=1, help="Maximum result pages (default 1)")
    parser.add_argument(
        "--no-headless",
        action="store_true",
        help="Show browser window (Chrome). Use for local debugging.",
    )
    args = parser.parse_args()

    config = get_config()
    configure_logging(
        level=config.log_level,
        log_file=config.log_file,
        log_stdout=config.log_stdout,
    )

    browser_config = BrowserConfig.from_app_config(config)
    if args.no_headless:
        browser_config = replace(browser_config, headless=False)

    if args.describe:
        description = await describe(args.describe, config=browser_config)
        print(json.dumps({"description": description}, indent=2, ensure_ascii=False))
        return

    outcome = await search_products(
        args.query,
        max(1, args.pages),
        config=browser_config,
        origin=config.origin,
    )

    print("\n" + "=" * 80)
    print("SEARCH RESULTS")
    print("=" * 80)
    print(f"\nPages fetched: {outcome.pages_fetched}")
    print(f"Stop reason: {outcome.stop_reason.value if outcome.stop_reason else 'unknown'}")
    print(f"Containers seen: {outcome.containers_seen}")
    print(f"Products accepted: {outcome.candidates_accepted}")
    if outcome.failed_pages:
        print(f"Failed pages: {outcome.failed_pages}")

    print("\n" + "=" * 80)
    print("JSON OUTPUT")
    print("=" * 80)
    print(json.dumps([p.to_dict() for p in outcome.products], indent=2, ensure_ascii=False))


if __name__ == "__main__":
    asyncio.run(main())
