"""
Pydantic schemas for the HTTP response contracts.

Field names follow the JSON the public endpoints have always returned
(`image`, not `image_url`).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from scraper.models import Product


class ProductResponse(BaseModel):
    """One product in the GET /api/products response."""

    title: str
    price: str
    image: str = Field(..., description="Resolved product image URL")
    link: Optional[str] = Field(None, description="Absolute product page URL")

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(
            title=product.title,
            price=product.price,
            image=product.image_url,
            link=product.link,
        )


class DescriptionResponse(BaseModel):
    """Response schema for GET /api/product-description."""

    description: str


class NotFoundResponse(BaseModel):
    """Returned with 404 when a search completes without products."""

    message: str
    products: list[ProductResponse] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Returned with 400 for missing parameters and 500 for scrape failures."""

    message: str
    error: Optional[str] = None
    stack: Optional[str] = None
