import json

import pytest
from sqlalchemy import select

from catalog_match.models import Match, Offer, Product
from catalog_match.services.catalog import ProductDraft, load_json_dict
from catalog_match.services.errors import (
    DuplicateSkuError,
    InvalidTransitionError,
    MatchNotFoundError,
    OfferNotFoundError,
)
from catalog_match.services.ingestion import ingest_offers
from catalog_match.services.review import approve_match, create_product_from_offer, reject_match
from catalog_match.stores.postgres import get_session


@pytest.fixture
async def review_offer(catalog, offer_records) -> tuple[str, list[str]]:
    """Offer in needs_review; returns (offer_id, match_ids in ranked order)."""
    async with get_session() as session:
        result = await ingest_offers(session, offer_records[1:])
    offer_id = result.created_offer_ids[0]
    async with get_session() as session:
        offer = (await session.execute(select(Offer).where(Offer.offer_id == offer_id))).scalar_one()
        match_ids = (
            await session.execute(select(Match.match_id).where(Match.offer_id == offer.id).order_by(Match.id))
        ).scalars().all()
    return offer_id, list(match_ids)


async def _statuses(offer_id: str) -> tuple[Offer, list[str]]:
    async with get_session() as session:
        offer = (await session.execute(select(Offer).where(Offer.offer_id == offer_id))).scalar_one()
        statuses = (
            await session.execute(select(Match.status).where(Match.offer_id == offer.id).order_by(Match.id))
        ).scalars().all()
    return offer, list(statuses)


class TestApprove:
    async def test_approve_rejects_siblings(self, review_offer):
        offer_id, match_ids = review_offer
        async with get_session() as session:
            outcome = await approve_match(session, match_ids[1])

        assert outcome.offer_id == offer_id
        assert outcome.offer_status == "matched"
        assert outcome.best_match_id == match_ids[1]
        assert outcome.match_status == "approved"
        assert outcome.rejected_match_ids == [match_ids[0], match_ids[2]]

        offer, statuses = await _statuses(offer_id)
        assert offer.status == "matched"
        assert statuses == ["rejected", "approved", "rejected"]

    async def test_reapprove_is_idempotent(self, review_offer):
        _, match_ids = review_offer
        async with get_session() as session:
            await approve_match(session, match_ids[0])
        async with get_session() as session:
            outcome = await approve_match(session, match_ids[0])

        assert outcome.offer_status == "matched"
        assert outcome.rejected_match_ids == []

    async def test_approve_rejected_match_fails(self, review_offer):
        _, match_ids = review_offer
        async with get_session() as session:
            await approve_match(session, match_ids[0])

        with pytest.raises(InvalidTransitionError):
            async with get_session() as session:
                await approve_match(session, match_ids[1])

    async def test_unknown_match(self, db):
        with pytest.raises(MatchNotFoundError):
            async with get_session() as session:
                await approve_match(session, "does-not-exist")


class TestReject:
    async def test_reject_walks_offer_back_to_new(self, review_offer):
        offer_id, match_ids = review_offer

        async with get_session() as session:
            outcome = await reject_match(session, match_ids[0])
        assert (outcome.offer_status, outcome.best_match_id) == ("needs_review", match_ids[1])

        async with get_session() as session:
            outcome = await reject_match(session, match_ids[1])
        assert (outcome.offer_status, outcome.best_match_id) == ("needs_review", match_ids[2])

        async with get_session() as session:
            outcome = await reject_match(session, match_ids[2])
        assert (outcome.offer_status, outcome.best_match_id) == ("new", None)

        offer, statuses = await _statuses(offer_id)
        assert offer.status == "new"
        assert offer.best_match_id is None
        assert statuses == ["rejected", "rejected", "rejected"]

    async def test_reject_twice_is_noop(self, review_offer):
        _, match_ids = review_offer
        async with get_session() as session:
            await reject_match(session, match_ids[2])
        async with get_session() as session:
            outcome = await reject_match(session, match_ids[2])

        assert outcome.match_status == "rejected"
        assert (outcome.offer_status, outcome.best_match_id) == ("needs_review", match_ids[0])

    async def test_reject_approved_match_fails(self, review_offer):
        _, match_ids = review_offer
        async with get_session() as session:
            await approve_match(session, match_ids[0])

        with pytest.raises(InvalidTransitionError):
            async with get_session() as session:
                await reject_match(session, match_ids[0])


class TestCreateProductFromOffer:
    async def test_creates_product_and_approved_link(self, review_offer):
        offer_id, match_ids = review_offer
        draft = ProductDraft(sku="ACME-WMAX-2", name="Widget Max II", brand="Acme", attributes={"gen": 2})
        async with get_session() as session:
            outcome = await create_product_from_offer(session, offer_id, draft)

        assert outcome.offer_status == "matched"
        assert outcome.match_status == "approved"
        assert outcome.best_match_id == outcome.match_id
        assert outcome.rejected_match_ids == match_ids
        assert outcome.product_id

        async with get_session() as session:
            product = (await session.execute(select(Product).where(Product.sku == "ACME-WMAX-2"))).scalar_one()
            match = (await session.execute(select(Match).where(Match.match_id == outcome.match_id))).scalar_one()

        assert product.product_id == outcome.product_id
        assert json.loads(product.alt_skus_json) == ["ACME-WMAX-2"]
        assert json.loads(product.synonyms_json) == ["widget max"]
        assert load_json_dict(product.attributes_json) == {"gen": 2}
        assert match.method == "manual-create"
        assert match.score == pytest.approx(0.9)
        assert json.loads(match.reasons_json) == ["Created product from offer"]

    async def test_refuses_matched_offer(self, review_offer):
        offer_id, match_ids = review_offer
        async with get_session() as session:
            await approve_match(session, match_ids[0])

        with pytest.raises(InvalidTransitionError):
            async with get_session() as session:
                await create_product_from_offer(session, offer_id, ProductDraft(sku="NEW-1", name="n", brand="b"))

    async def test_duplicate_sku(self, review_offer):
        offer_id, _ = review_offer
        with pytest.raises(DuplicateSkuError):
            async with get_session() as session:
                await create_product_from_offer(session, offer_id, ProductDraft(sku="ACME-X100", name="n", brand="b"))

        # Nothing changed
        offer, statuses = await _statuses(offer_id)
        assert offer.status == "needs_review"
        assert statuses == ["candidate", "candidate", "candidate"]

    async def test_unknown_offer(self, db):
        with pytest.raises(OfferNotFoundError):
            async with get_session() as session:
                await create_product_from_offer(session, "missing", ProductDraft(sku="S", name="n", brand="b"))
