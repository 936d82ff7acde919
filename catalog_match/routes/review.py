"""Review endpoints for human match decisions.

POST /v1/matches/{match_id}/approve - approve, rejecting open siblings
POST /v1/matches/{match_id}/reject  - reject; offer reverts to "new" when nothing is left

Decisions on the same offer are serialized by a Redis lock here and by a
row lock inside the transaction.
"""

from fastapi import APIRouter, Path

from catalog_match.routes.offers import outcome_out
from catalog_match.schemas import ReviewOutcomeOut
from catalog_match.services.review import approve_match, offer_id_for_match, reject_match
from catalog_match.stores.postgres import get_session
from catalog_match.stores.redis import review_lock

router = APIRouter()

_MATCH_ID = Path(
    description="Match ID",
    min_length=1,
    max_length=100,
    pattern=r"^[a-zA-Z0-9_-]+$",
)


async def _owning_offer_id(match_id: str) -> str:
    async with get_session() as session:
        return await offer_id_for_match(session, match_id)


@router.post("/{match_id}/approve", response_model=ReviewOutcomeOut)
async def approve(match_id: str = _MATCH_ID) -> ReviewOutcomeOut:
    """Approve a candidate match."""
    offer_id = await _owning_offer_id(match_id)
    async with review_lock(offer_id):
        async with get_session() as session:
            outcome = await approve_match(session, match_id)
    return outcome_out(outcome)


@router.post("/{match_id}/reject", response_model=ReviewOutcomeOut)
async def reject(match_id: str = _MATCH_ID) -> ReviewOutcomeOut:
    """Reject a candidate match."""
    offer_id = await _owning_offer_id(match_id)
    async with review_lock(offer_id):
        async with get_session() as session:
            outcome = await reject_match(session, match_id)
    return outcome_out(outcome)
