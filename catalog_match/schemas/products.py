"""Schemas for catalog product creation."""

from typing import Any

from pydantic import BaseModel, Field


class ProductDraftIn(BaseModel):
    """Request body for creating a product (admin or from an offer)."""

    sku: str = Field(min_length=1, max_length=200)
    name: str = Field(min_length=1, max_length=500)
    brand: str = Field(max_length=200)
    category: str | None = None
    unit: str | None = None
    pkg_size: int | None = Field(alias="pkgSize", default=None, gt=0)
    upc: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)
    alt_skus: list[str] = Field(alias="altSkus", default_factory=list)
    synonyms: list[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "str_strip_whitespace": True}


class SeedResponse(BaseModel):
    """Response from the catalog seed endpoint."""

    success: bool
    inserted: int
    skipped: int
