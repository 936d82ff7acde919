"""UI read endpoints.

GET /v1/ui/dashboard    - aggregate counts
GET /v1/ui/review-queue - offers awaiting review with ranked candidates
GET /v1/ui/matched      - matched offers with their approved product
GET /v1/ui/products     - catalog products

Routers are thin: call services for business logic.
"""

from fastapi import APIRouter, Query

from catalog_match.schemas import DashboardSummary, MatchedItem, ProductOut, ReviewQueueItem
from catalog_match.services.dashboard import (
    get_dashboard_summary,
    get_matched_offers,
    get_review_queue,
    list_products,
)

router = APIRouter()


@router.get("/dashboard", response_model=DashboardSummary)
async def get_dashboard() -> DashboardSummary:
    """Get dashboard summary statistics."""
    return await get_dashboard_summary()


@router.get("/review-queue", response_model=list[ReviewQueueItem])
async def review_queue() -> list[ReviewQueueItem]:
    """Get offers that need manual review."""
    return await get_review_queue()


@router.get("/matched", response_model=list[MatchedItem])
async def matched_offers() -> list[MatchedItem]:
    """Get matched offers with product details."""
    return await get_matched_offers()


@router.get("/products", response_model=list[ProductOut])
async def products(
    limit: int | None = Query(default=None, ge=1, le=10000, description="Max products to return"),
) -> list[ProductOut]:
    """Get catalog products."""
    return await list_products(limit=limit)
