"""
Route handlers for product search and product description.

Query validation lives here, not in the engine: the engine assumes a
non-empty query / URL and a page count of at least 1.
"""

from __future__ import annotations

import re
import traceback
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from api.schemas import (
    DescriptionResponse,
    ErrorResponse,
    NotFoundResponse,
    ProductResponse,
)
from api.services.scrape_service import ScrapeService
from shared.logging import bind_request_context, get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["products"])

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def get_scrape_service(request: Request) -> ScrapeService:
    """Dependency to get the app-wide ScrapeService."""
    return request.app.state.scrape_service


def parse_pages(raw: Optional[str]) -> int:
    """Lenient page count: leading integer of the value, falling back to 1."""
    if not raw:
        return 1
    match = _LEADING_INT.match(raw)
    if not match:
        return 1
    pages = int(match.group(1))
    return pages if pages >= 1 else 1


def _error_response(
    status_code: int,
    message: str,
    exc: Optional[BaseException] = None,
    *,
    include_stack: bool = False,
) -> JSONResponse:
    body = ErrorResponse(message=message)
    if exc is not None:
        body.error = str(exc)
        if include_stack:
            body.stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.get(
    "/products",
    response_model=list[ProductResponse],
    summary="Search products across result pages",
)
async def list_products(
    service: Annotated[ScrapeService, Depends(get_scrape_service)],
    q: Optional[str] = None,
    pages: Optional[str] = None,
):
    """
    Return products for the search term `q` from up to `pages` result pages.

    An empty result is reported as 404 with an empty `products` list, so
    callers can tell "nothing found" apart from a scrape failure (500).
    """
    if not q:
        return _error_response(
            status.HTTP_400_BAD_REQUEST, "Query parameter `q` is required"
        )

    max_pages = parse_pages(pages)
    bind_request_context(query=q, operation="search")
    logger.info("products_requested", max_pages=max_pages)

    try:
        products = await service.search_products(q, max_pages)
    except Exception as e:
        logger.error("products_failed", error=str(e), error_type=type(e).__name__)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Error scraping products",
            e,
            include_stack=service.config.environment != "prod",
        )

    if not products:
        body = NotFoundResponse(message="No products found")
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=body.model_dump())

    logger.info("products_returned", count=len(products))
    return [ProductResponse.from_product(p) for p in products]


@router.get(
    "/product-description",
    response_model=DescriptionResponse,
    summary="Fetch the description of one product page",
)
async def get_product_description(
    service: Annotated[ScrapeService, Depends(get_scrape_service)],
    url: Optional[str] = None,
):
    """Return the description text for the product page at `url`."""
    if not url:
        return _error_response(
            status.HTTP_400_BAD_REQUEST, "Query parameter `url` is required"
        )

    bind_request_context(url=url, operation="describe")

    try:
        description = await service.describe_product(url)
    except Exception as e:
        logger.error("description_failed", error=str(e), error_type=type(e).__name__)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Error scraping product description",
            e,
        )

    return DescriptionResponse(description=description)
