"""
structlog wiring shared by the scraper engine, the HTTP app and the CLI.

Every record is rendered as one JSON line carrying an ISO UTC timestamp, the
level, the event name under "message", and whatever fields were bound for
the current call via `bind_request_context`.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import structlog

_LINE_FORMAT = "%(message)s"


def _processor_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.EventRenamer("message"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def _attach(root: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_LINE_FORMAT))
    root.addHandler(handler)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    log_stdout: bool = True,
) -> None:
    """
    Route structlog through the stdlib root logger and set the JSON pipeline.

    Entry points (app factory, CLI) call this once. Existing root handlers are
    replaced. With log_stdout off and no log_file, stdout is still used.
    """
    numeric_level = _resolve_level(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(numeric_level)

    targets: list[logging.Handler] = []
    if log_stdout:
        targets.append(logging.StreamHandler(sys.stdout))
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        targets.append(logging.FileHandler(log_file, encoding="utf-8"))
    if not targets:
        targets.append(logging.StreamHandler(sys.stdout))

    for handler in targets:
        _attach(root, handler, numeric_level)

    structlog.configure(
        processors=_processor_chain(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """Module-level logger; configures defaults on first use if nobody has."""
    if not structlog.is_configured():
        configure_logging()
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()


def bind_request_context(
    *,
    query: Optional[str] = None,
    url: Optional[str] = None,
    operation: Optional[str] = None,
    **extra: Any,
) -> Mapping[str, Any]:
    """
    Attach per-call fields to every subsequent record in this context.

    Searches bind `query`, description lookups bind `url`; both bind
    `operation`. Fields left as None are not bound. Returns what was bound.
    """
    fields = {"query": query, "url": url, "operation": operation, **extra}
    bound = {key: value for key, value in fields.items() if value is not None}
    structlog.contextvars.bind_contextvars(**bound)
    return bound
