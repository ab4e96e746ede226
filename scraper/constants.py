"""
Scraper constants: site origin, timeouts, retry policy, launch flags, selectors.
"""

from __future__ import annotations

from shared.config import DEFAULT_ORIGIN

ORIGIN = DEFAULT_ORIGIN
SEARCH_PATH = "/s"

# Timeout constants (in milliseconds)
NAV_TIMEOUT_MS = 120_000  # Search result page navigation (per attempt)
DESCRIPTION_NAV_TIMEOUT_MS = 60_000  # Product page navigation (single attempt)
LAUNCH_TIMEOUT_MS = 60_000  # Browser process start
PROTOCOL_TIMEOUT_MS = 180_000  # Context-wide default for browser operations

# Retry policy: 3 attempts, backoff 5s, 10s between them
MAX_ATTEMPTS = 3
BASE_DELAY_MS = 5_000

# Pause between consecutive result pages
INTER_PAGE_DELAY_SECONDS = 5.0

DEFAULT_MAX_PAGES = 5

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Chromium flags for constrained (container / CI) environments
LAUNCH_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--single-process",
    "--disable-gpu",
    "--disable-extensions",
    "--disable-infobars",
    "--window-position=0,0",
    "--ignore-certificate-errors",
    "--ignore-certificate-errors-spki-list",
)

# Search result markup
RESULT_ITEM_SELECTOR = ".s-main-slot .s-result-item"
TITLE_SELECTOR = "h2"
PRICE_SELECTOR = ".a-price-whole"
IMAGE_SELECTOR = ".s-image"
LINK_SELECTOR = "a"

# Product page markup
DESCRIPTION_SELECTOR = "#productDescription"
FEATURE_BULLETS_SELECTOR = "#feature-bullets ul"
NO_DESCRIPTION = "no description available"

# Substrings that indicate a challenge/captcha interstitial (case-insensitive)
BOT_BLOCK_INDICATORS = (
    "enter the characters you see below",
    "type the characters you see in this image",
    "captcha",
    "robot check",
    "verify you are human",
)
