"""Read projections for the dashboard, review queue and matched list.

Pure projections over persisted state: no business logic lives here.
"""

from sqlalchemy import func, select

from catalog_match.models import Match, Offer, OfferStatus, Product
from catalog_match.schemas import (
    DashboardSummary,
    MatchedItem,
    MatchOut,
    OfferOut,
    ProductOut,
    ReviewQueueItem,
)
from catalog_match.services.catalog import load_json_dict, load_json_list, product_alt_skus, product_synonyms
from catalog_match.stores.postgres import get_session


def product_out(product: Product) -> ProductOut:
    return ProductOut(
        product_id=product.product_id,
        sku=product.sku,
        name=product.name,
        brand=product.brand,
        category=product.category,
        unit=product.unit,
        pkg_size=product.pkg_size,
        upc=product.upc,
        attributes=load_json_dict(product.attributes_json),
        alt_skus=product_alt_skus(product),
        synonyms=product_synonyms(product),
        created_at=product.created_at,
    )


def _offer_out(offer: Offer, best_match_public_id: str | None) -> OfferOut:
    return OfferOut(
        offer_id=offer.offer_id,
        supplier=offer.supplier,
        supplier_sku=offer.supplier_sku,
        description=offer.description,
        pack=offer.pack,
        uom=offer.uom,
        price=offer.price,
        currency=offer.currency,
        notes=offer.notes,
        source=offer.source,
        tokens=list(load_json_list(offer.tokens_json)),
        status=offer.status,
        best_match_id=best_match_public_id,
        created_at=offer.created_at,
    )


def _match_out(match: Match, offer: Offer, product: Product) -> MatchOut:
    return MatchOut(
        match_id=match.match_id,
        offer_id=offer.offer_id,
        product_id=product.product_id,
        product_sku=product.sku,
        product_name=product.name,
        score=match.score,
        method=match.method,
        reasons=list(load_json_list(match.reasons_json)),
        status=match.status,
    )


async def get_dashboard_summary() -> DashboardSummary:
    """Total offers, matched, needs-review and product counts."""
    async with get_session() as session:
        status_rows = await session.execute(select(Offer.status, func.count(Offer.id)).group_by(Offer.status))
        by_status = {status: count for status, count in status_rows.all()}
        product_count = (await session.execute(select(func.count(Product.id)))).scalar() or 0

    return DashboardSummary(
        total_offers=sum(by_status.values()),
        matched=by_status.get(OfferStatus.MATCHED.value, 0),
        needs_review=by_status.get(OfferStatus.NEEDS_REVIEW.value, 0),
        products=product_count,
    )


async def get_review_queue() -> list[ReviewQueueItem]:
    """Offers with status needs_review, each with its matches ranked by score."""
    async with get_session() as session:
        offers = (
            await session.execute(
                select(Offer).where(Offer.status == OfferStatus.NEEDS_REVIEW.value).order_by(Offer.id.asc())
            )
        ).scalars().all()
        if not offers:
            return []

        offer_pks = [o.id for o in offers]
        rows = await session.execute(
            select(Match, Product)
            .join(Product, Product.id == Match.product_id)
            .where(Match.offer_id.in_(offer_pks))
            .order_by(Match.offer_id.asc(), Match.score.desc(), Match.id.asc())
        )
        grouped: dict[int, list[tuple[Match, Product]]] = {pk: [] for pk in offer_pks}
        for match, product in rows.all():
            grouped[match.offer_id].append((match, product))

    items: list[ReviewQueueItem] = []
    for offer in offers:
        pairs = grouped[offer.id]
        best_public = next((m.match_id for m, _ in pairs if m.id == offer.best_match_id), None)
        top = pairs[0] if pairs else None
        items.append(
            ReviewQueueItem(
                offer=_offer_out(offer, best_public),
                top_match=_match_out(top[0], offer, top[1]) if top else None,
                product=product_out(top[1]) if top else None,
                all_candidates=[_match_out(m, offer, p) for m, p in pairs],
            )
        )
    return items


async def get_matched_offers() -> list[MatchedItem]:
    """Offers with status matched, with their approved match and product."""
    async with get_session() as session:
        rows = await session.execute(
            select(Offer, Match, Product)
            .join(Match, Match.id == Offer.best_match_id)
            .join(Product, Product.id == Match.product_id)
            .where(Offer.status == OfferStatus.MATCHED.value)
            .order_by(Offer.id.asc())
        )
        results = rows.all()

    return [
        MatchedItem(
            offer=_offer_out(offer, match.match_id),
            match=_match_out(match, offer, product),
            product=product_out(product),
        )
        for offer, match, product in results
    ]


async def list_products(limit: int | None = None) -> list[ProductOut]:
    """All catalog products in creation order."""
    async with get_session() as session:
        query = select(Product).order_by(Product.id.asc())
        if limit is not None:
            query = query.limit(limit)
        products = (await session.execute(query)).scalars().all()
    return [product_out(p) for p in products]
