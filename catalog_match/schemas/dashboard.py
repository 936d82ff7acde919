"""Schemas for the read surfaces (/v1/ui/*) and review responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ProductOut(BaseModel):
    """A catalog product."""

    product_id: str = Field(alias="productId")
    sku: str
    name: str
    brand: str
    category: str | None = None
    unit: str | None = None
    pkg_size: int | None = Field(alias="pkgSize", default=None)
    upc: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)
    alt_skus: list[str] = Field(alias="altSkus", default_factory=list)
    synonyms: list[str] = Field(default_factory=list)
    created_at: datetime | None = Field(alias="createdAt", default=None)

    model_config = {"populate_by_name": True}


class OfferOut(BaseModel):
    """A supplier offer."""

    offer_id: str = Field(alias="offerId")
    supplier: str
    supplier_sku: str | None = Field(alias="supplierSku", default=None)
    description: str
    pack: float | None = None
    uom: str | None = None
    price: float | None = None
    currency: str | None = None
    notes: str | None = None
    source: str
    tokens: list[str] = Field(default_factory=list)
    status: str
    best_match_id: str | None = Field(alias="bestMatchId", default=None)
    created_at: datetime | None = Field(alias="createdAt", default=None)

    model_config = {"populate_by_name": True}


class MatchOut(BaseModel):
    """A scored offer -> product link."""

    match_id: str = Field(alias="matchId")
    offer_id: str = Field(alias="offerId")
    product_id: str = Field(alias="productId")
    product_sku: str = Field(alias="productSku")
    product_name: str = Field(alias="productName")
    score: float = Field(ge=0)
    method: str
    reasons: list[str] = Field(default_factory=list)
    status: str

    model_config = {"populate_by_name": True}


class DashboardSummary(BaseModel):
    """Aggregate counts for the dashboard."""

    total_offers: int = Field(alias="totalOffers", ge=0)
    matched: int = Field(ge=0)
    needs_review: int = Field(alias="needsReview", ge=0)
    products: int = Field(ge=0)

    model_config = {"populate_by_name": True}


class ReviewQueueItem(BaseModel):
    """An offer awaiting review with its ranked candidates."""

    offer: OfferOut
    top_match: MatchOut | None = Field(alias="topMatch", default=None)
    product: ProductOut | None = None
    all_candidates: list[MatchOut] = Field(alias="allCandidates", default_factory=list)

    model_config = {"populate_by_name": True}


class MatchedItem(BaseModel):
    """A matched offer with its approved match and product."""

    offer: OfferOut
    match: MatchOut
    product: ProductOut


class ReviewOutcomeOut(BaseModel):
    """Result of a review decision."""

    success: bool = True
    offer_id: str = Field(alias="offerId")
    offer_status: str = Field(alias="offerStatus")
    best_match_id: str | None = Field(alias="bestMatchId", default=None)
    match_id: str = Field(alias="matchId")
    match_status: str = Field(alias="matchStatus")
    rejected_match_ids: list[str] = Field(alias="rejectedMatchIds", default_factory=list)
    product_id: str | None = Field(alias="productId", default=None)

    model_config = {"populate_by_name": True}
