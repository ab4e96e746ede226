"""
Bounded retry with exponential backoff for async steps.

Every failure is treated as transient: there is no fail-fast on error type.
After the last attempt the original exception propagates unchanged.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from scraper.constants import BASE_DELAY_MS, MAX_ATTEMPTS
from shared.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

AttemptFailedHook = Callable[[int, Exception], None]


def backoff_delay_seconds(attempt: int, base_delay_ms: int = BASE_DELAY_MS) -> float:
    """Delay after a failed attempt (0-based index): base * 2**attempt, uncapped."""
    return base_delay_ms * (2**attempt) / 1000.0


async def run_with_retry(
    op: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = MAX_ATTEMPTS,
    base_delay_ms: int = BASE_DELAY_MS,
    operation: str = "operation",
    on_attempt_failed: Optional[AttemptFailedHook] = None,
) -> T:
    """
    Run `op` up to `max_attempts` times, sleeping between failed attempts.

    With the defaults (3 attempts, 5000 ms base) the attempts start at roughly
    0 s, 5 s and 15 s. The delay is not capped, so keep max_attempts small.

    `on_attempt_failed(attempt, error)` is called for every failure with the
    1-based attempt number; it cannot change the retry decision.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    attempt = 0
    while True:
        try:
            return await op()
        except Exception as e:
            logger.warning(
                "retry.attempt_failed",
                operation=operation,
                attempt=attempt + 1,
                max_attempts=max_attempts,
                error=str(e),
                error_type=type(e).__name__,
            )
            if on_attempt_failed is not None:
                on_attempt_failed(attempt + 1, e)
            if attempt + 1 >= max_attempts:
                raise
            delay = backoff_delay_seconds(attempt, base_delay_ms)
            logger.info(
                "retry.backoff",
                operation=operation,
                attempt=attempt + 1,
                backoff_s=delay,
            )
            await asyncio.sleep(delay)
            attempt += 1
