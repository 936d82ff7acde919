"""Offer endpoints: batch ingestion and manual product creation.

POST /v1/offers/ingest                    - ingest a batch of raw offer records
POST /v1/offers/{offer_id}/create-product - create a product from an offer

Routers are thin: call services for business logic.
"""

from fastapi import APIRouter, Path

from catalog_match.schemas import (
    IngestRequest,
    IngestResponse,
    IngestStats,
    ProductDraftIn,
    RecordErrorOut,
    ReviewOutcomeOut,
)
from catalog_match.services.catalog import ProductDraft
from catalog_match.services.ingestion import ingest_offers
from catalog_match.services.review import ReviewOutcome, create_product_from_offer
from catalog_match.stores.postgres import get_session
from catalog_match.stores.redis import review_lock

router = APIRouter()


def outcome_out(outcome: ReviewOutcome) -> ReviewOutcomeOut:
    return ReviewOutcomeOut(
        offer_id=outcome.offer_id,
        offer_status=outcome.offer_status,
        best_match_id=outcome.best_match_id,
        match_id=outcome.match_id,
        match_status=outcome.match_status,
        rejected_match_ids=outcome.rejected_match_ids,
        product_id=outcome.product_id,
    )


@router.post("/ingest", response_model=IngestResponse)
async def trigger_ingestion(request: IngestRequest) -> IngestResponse:
    """Ingest supplier offers and propose catalog matches.

    Invalid records are reported individually; the rest of the batch is
    still ingested.
    """
    async with get_session() as session:
        result = await ingest_offers(session, request.offers)

    stats = result.stats
    return IngestResponse(
        success=stats.failed == 0,
        created=result.created_offer_ids,
        stats=IngestStats(
            received=stats.received,
            created=stats.created,
            auto_matched=stats.auto_matched,
            needs_review=stats.needs_review,
            unmatched=stats.unmatched,
            failed=stats.failed,
        ),
        errors=[RecordErrorOut(index=e.index, code=e.code, message=e.message) for e in result.errors],
    )


@router.post("/{offer_id}/create-product", response_model=ReviewOutcomeOut)
async def create_product_for_offer(
    request: ProductDraftIn,
    offer_id: str = Path(
        description="Offer ID to create a product from",
        min_length=1,
        max_length=100,
        pattern=r"^[a-zA-Z0-9_-]+$",
    ),
) -> ReviewOutcomeOut:
    """Create a catalog product from an offer and approve the link.

    `altSkus` and `synonyms` from the body are added after the seeded SKU
    and offer description.
    """
    draft = ProductDraft(
        sku=request.sku,
        name=request.name,
        brand=request.brand,
        category=request.category,
        unit=request.unit,
        pkg_size=request.pkg_size,
        upc=request.upc,
        attributes=request.attributes,
        alt_skus=request.alt_skus,
        synonyms=request.synonyms,
    )
    async with review_lock(offer_id):
        async with get_session() as session:
            outcome = await create_product_from_offer(session, offer_id, draft)
    return outcome_out(outcome)
