"""
Shared utilities for the product scraper.

This package is intentionally small. It provides:

- `shared.config` for environment-based configuration
- `shared.logging` for structlog-based structured logging

Both the scraping engine and the HTTP shim treat `shared/` as read-only
infrastructure code.
"""
