"""Review resolution: approve / reject / create-product-from-offer.

Match status machine:
    candidate -> approved   (terminal)
    candidate -> rejected   (terminal)

Offer status is derived from the offer's full match set, never set ad hoc:
- an approved match exists     -> matched (best_match_id = that match)
- open candidates exist        -> needs_review (provisional best_match_id)
- otherwise                    -> new (best_match_id cleared)

Every decision is planned by a pure function over the offer's matches
(`plan_approval` / `plan_rejection`) and applied in one transaction while
holding a row lock on the offer, so concurrent decisions on the same offer
are serialized.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_match.models import Match, MatchMethod, MatchStatus, Offer, OfferStatus
from catalog_match.services.catalog import ProductDraft, create_product
from catalog_match.services.errors import (
    InvalidTransitionError,
    MatchNotFoundError,
    OfferNotFoundError,
)

logger = logging.getLogger("uvicorn.error")

MANUAL_CREATE_SCORE = 0.9
MANUAL_CREATE_REASON = "Created product from offer"


@dataclass(frozen=True)
class MatchState:
    """Minimal view of a match for transition planning."""

    pk: int
    status: str
    score: float


@dataclass
class OfferTransition:
    """Result of planning a decision over one offer's matches."""

    offer_status: str
    best_match_pk: int | None
    match_statuses: dict[int, str]
    cascade_rejected: list[int] = field(default_factory=list)


@dataclass
class ReviewOutcome:
    """What a review operation changed (public IDs)."""

    offer_id: str
    offer_status: str
    best_match_id: str | None
    match_id: str
    match_status: str
    rejected_match_ids: list[str] = field(default_factory=list)
    product_id: str | None = None


# ============================================================
# Pure planning
# ============================================================


def derive_offer_state(matches: list[MatchState], current_best: int | None) -> tuple[str, int | None]:
    """Derive (offer_status, best_match_pk) from the offer's matches.

    A provisional pointer that still refers to an open candidate is kept;
    otherwise the best remaining candidate (highest score, earliest created)
    takes its place.
    """
    approved = [m for m in matches if m.status == MatchStatus.APPROVED.value]
    if approved:
        return OfferStatus.MATCHED.value, approved[0].pk

    open_candidates = [m for m in matches if m.status == MatchStatus.CANDIDATE.value]
    if not open_candidates:
        return OfferStatus.NEW.value, None

    if any(m.pk == current_best for m in open_candidates):
        return OfferStatus.NEEDS_REVIEW.value, current_best
    best = min(open_candidates, key=lambda m: (-m.score, m.pk))
    return OfferStatus.NEEDS_REVIEW.value, best.pk


def _find(matches: list[MatchState], pk: int) -> MatchState:
    for m in matches:
        if m.pk == pk:
            return m
    raise ValueError(f"match {pk} is not part of the offer's match set")


def plan_approval(matches: list[MatchState], target_pk: int, current_best: int | None = None) -> OfferTransition:
    """Plan approving `target_pk`: approve it and reject every open sibling.

    Re-approving an approved match re-asserts the same end state.

    Raises:
        InvalidTransitionError: The target is rejected, or another match is
            already approved for this offer.
    """
    target = _find(matches, target_pk)
    if target.status == MatchStatus.REJECTED.value:
        raise InvalidTransitionError(
            "Cannot approve a rejected match",
            {"match_pk": target_pk, "status": target.status},
        )
    other_approved = [m for m in matches if m.status == MatchStatus.APPROVED.value and m.pk != target_pk]
    if other_approved:
        raise InvalidTransitionError(
            "Offer already has an approved match",
            {"match_pk": target_pk, "approved_pk": other_approved[0].pk},
        )

    statuses: dict[int, str] = {}
    cascade: list[int] = []
    for m in matches:
        if m.pk == target_pk:
            statuses[m.pk] = MatchStatus.APPROVED.value
        elif m.status == MatchStatus.CANDIDATE.value:
            statuses[m.pk] = MatchStatus.REJECTED.value
            cascade.append(m.pk)
        else:
            statuses[m.pk] = m.status

    planned = [MatchState(pk=m.pk, status=statuses[m.pk], score=m.score) for m in matches]
    offer_status, best = derive_offer_state(planned, current_best)
    return OfferTransition(offer_status=offer_status, best_match_pk=best, match_statuses=statuses, cascade_rejected=cascade)


def plan_rejection(matches: list[MatchState], target_pk: int, current_best: int | None = None) -> OfferTransition:
    """Plan rejecting `target_pk` and re-derive the offer state.

    Rejecting an already rejected match is a no-op re-assertion.

    Raises:
        InvalidTransitionError: The target is approved.
    """
    target = _find(matches, target_pk)
    if target.status == MatchStatus.APPROVED.value:
        raise InvalidTransitionError(
            "Cannot reject an approved match",
            {"match_pk": target_pk, "status": target.status},
        )

    statuses = {m.pk: m.status for m in matches}
    statuses[target_pk] = MatchStatus.REJECTED.value

    planned = [MatchState(pk=m.pk, status=statuses[m.pk], score=m.score) for m in matches]
    offer_status, best = derive_offer_state(planned, current_best)
    return OfferTransition(offer_status=offer_status, best_match_pk=best, match_statuses=statuses)


# ============================================================
# Persistence
# ============================================================


async def _lock_offer(session: AsyncSession, offer_pk: int) -> Offer:
    result = await session.execute(
        select(Offer)
        .where(Offer.id == offer_pk)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def _load_offer_matches(session: AsyncSession, offer_pk: int) -> list[Match]:
    result = await session.execute(
        select(Match)
        .where(Match.offer_id == offer_pk)
        .order_by(Match.id.asc())
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


def _states(matches: list[Match]) -> list[MatchState]:
    return [MatchState(pk=m.id, status=m.status, score=m.score) for m in matches]


async def apply_transition(
    session: AsyncSession,
    offer: Offer,
    matches: list[Match],
    transition: OfferTransition,
    target: Match,
) -> ReviewOutcome:
    """Write a planned transition to the offer and its matches."""
    by_pk = {m.id: m for m in matches}
    for pk, status in transition.match_statuses.items():
        if by_pk[pk].status != status:
            by_pk[pk].status = status

    offer.status = transition.offer_status
    offer.best_match_id = transition.best_match_pk
    await session.flush()

    best = by_pk.get(transition.best_match_pk) if transition.best_match_pk is not None else None
    return ReviewOutcome(
        offer_id=offer.offer_id,
        offer_status=offer.status,
        best_match_id=best.match_id if best else None,
        match_id=target.match_id,
        match_status=target.status,
        rejected_match_ids=[by_pk[pk].match_id for pk in transition.cascade_rejected],
    )


async def approve_loaded(session: AsyncSession, offer: Offer, matches: list[Match], target: Match) -> ReviewOutcome:
    """Approve `target` given the offer and its (locked) match set."""
    transition = plan_approval(_states(matches), target.id, offer.best_match_id)
    return await apply_transition(session, offer, matches, transition, target)


async def _get_match(session: AsyncSession, match_id: str) -> Match:
    result = await session.execute(select(Match).where(Match.match_id == match_id))
    match = result.scalar_one_or_none()
    if match is None:
        raise MatchNotFoundError(match_id)
    return match


async def _find_offer(session: AsyncSession, offer_id: str) -> Offer:
    result = await session.execute(select(Offer).where(Offer.offer_id == offer_id))
    offer = result.scalar_one_or_none()
    if offer is None:
        raise OfferNotFoundError(offer_id)
    return offer


async def offer_id_for_match(session: AsyncSession, match_id: str) -> str:
    """Public offer ID owning a match (used to scope review locks)."""
    match = await _get_match(session, match_id)
    result = await session.execute(select(Offer.offer_id).where(Offer.id == match.offer_id))
    return result.scalar_one()


async def approve_match(session: AsyncSession, match_id: str) -> ReviewOutcome:
    """Approve a match and reject its open siblings.

    Raises:
        MatchNotFoundError: Unknown match ID.
        InvalidTransitionError: See plan_approval.
    """
    match = await _get_match(session, match_id)
    offer = await _lock_offer(session, match.offer_id)
    matches = await _load_offer_matches(session, offer.id)
    target = next(m for m in matches if m.id == match.id)

    outcome = await approve_loaded(session, offer, matches, target)
    logger.info(
        f"[review] approve match={match_id} offer={outcome.offer_id} "
        f"cascade_rejected={len(outcome.rejected_match_ids)}"
    )
    return outcome


async def reject_match(session: AsyncSession, match_id: str) -> ReviewOutcome:
    """Reject a match; the offer falls back to `new` when no candidate is left.

    Raises:
        MatchNotFoundError: Unknown match ID.
        InvalidTransitionError: See plan_rejection.
    """
    match = await _get_match(session, match_id)
    offer = await _lock_offer(session, match.offer_id)
    matches = await _load_offer_matches(session, offer.id)
    target = next(m for m in matches if m.id == match.id)

    transition = plan_rejection(_states(matches), target.id, offer.best_match_id)
    outcome = await apply_transition(session, offer, matches, transition, target)
    logger.info(f"[review] reject match={match_id} offer={outcome.offer_id} offer_status={outcome.offer_status}")
    return outcome


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(v for v in values if v))


async def create_product_from_offer(session: AsyncSession, offer_id: str, draft: ProductDraft) -> ReviewOutcome:
    """Create a catalog product from an offer and link them with an approved match.

    The product's alternate SKUs are seeded with the draft SKU and its synonyms
    with the offer description; the draft's own lists follow, without
    duplicates. Open candidates of the offer are rejected.

    Raises:
        OfferNotFoundError: Unknown offer ID.
        DuplicateSkuError: The draft SKU already exists.
        InvalidTransitionError: The offer already has an approved match.
    """
    found = await _find_offer(session, offer_id)
    offer = await _lock_offer(session, found.id)
    matches = await _load_offer_matches(session, offer.id)
    if any(m.status == MatchStatus.APPROVED.value for m in matches):
        raise InvalidTransitionError(
            "Offer already has an approved match",
            {"offer_id": offer_id},
        )

    product = await create_product(
        session,
        ProductDraft(
            sku=draft.sku,
            name=draft.name,
            brand=draft.brand,
            category=draft.category,
            unit=draft.unit,
            pkg_size=draft.pkg_size,
            upc=draft.upc,
            attributes=draft.attributes,
            alt_skus=_unique([draft.sku, *draft.alt_skus]),
            synonyms=_unique([offer.description, *draft.synonyms]),
        ),
    )

    match = Match(
        offer_id=offer.id,
        product_id=product.id,
        score=MANUAL_CREATE_SCORE,
        method=MatchMethod.MANUAL_CREATE.value,
        reasons_json=json.dumps([MANUAL_CREATE_REASON], ensure_ascii=False),
        status=MatchStatus.APPROVED.value,
    )
    session.add(match)
    await session.flush()

    matches.append(match)
    outcome = await approve_loaded(session, offer, matches, match)
    outcome.product_id = product.product_id
    logger.info(f"[review] create-product sku={product.sku} offer={offer_id} match={match.match_id}")
    return outcome
