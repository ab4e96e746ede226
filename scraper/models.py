"""
Records produced by the scraping engine.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Product:
    """One search result. title, price and image_url are always non-empty."""

    title: str
    price: str
    image_url: str
    link: Optional[str]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ExtractionReport:
    """Products accepted from one result page, plus the drift counter."""

    products: list[Product] = field(default_factory=list)
    containers_seen: int = 0

    @property
    def candidates_accepted(self) -> int:
        return len(self.products)

    @property
    def candidates_dropped(self) -> int:
        return self.containers_seen - self.candidates_accepted


class SearchState(str, Enum):
    FETCHING = "fetching"
    ACCUMULATING = "accumulating"
    STOPPED = "stopped"


class StopReason(str, Enum):
    # A page yielded zero candidates (or failed outright).
    EXHAUSTED = "exhausted"
    # Every page up to max_pages yielded candidates.
    EXHAUSTED_MAX_PAGES = "exhausted_max_pages"


@dataclass
class SearchOutcome:
    """Result of one paginated search, in page order."""

    products: list[Product] = field(default_factory=list)
    pages_fetched: int = 0
    stop_reason: Optional[StopReason] = None
    containers_seen: int = 0
    failed_pages: list[int] = field(default_factory=list)
    # Every state the search entered, in order.
    state_history: list[SearchState] = field(default_factory=list)

    @property
    def candidates_accepted(self) -> int:
        return len(self.products)
