"""Catalog service: product snapshots, creation and seeding.

The scoring path never touches ORM rows. It works on immutable snapshots:
- CatalogProduct: what the scorer needs to know about a product
- OfferFields: the matchable fields of an offer

Products are keyed by SKU; creating a second product with the same SKU is an
integrity error (DuplicateSkuError).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_match.models import Product
from catalog_match.services.errors import DuplicateSkuError

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class CatalogProduct:
    """Immutable view of a catalog product used for scoring."""

    pk: int
    product_id: str
    sku: str
    name: str
    brand: str
    category: str | None = None
    unit: str | None = None
    pkg_size: int | None = None
    alt_skus: tuple[str, ...] = ()
    synonyms: tuple[str, ...] = ()
    upc: str | None = None


@dataclass(frozen=True)
class OfferFields:
    """Matchable fields of a supplier offer."""

    description: str
    supplier: str | None = None
    supplier_sku: str | None = None
    uom: str | None = None
    pack: float | None = None


@dataclass
class ProductDraft:
    """Fields needed to create a catalog product."""

    sku: str
    name: str
    brand: str
    category: str | None = None
    unit: str | None = None
    pkg_size: int | None = None
    upc: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    alt_skus: list[str] = field(default_factory=list)
    synonyms: list[str] = field(default_factory=list)


@dataclass
class SeedStats:
    inserted: int = 0
    skipped: int = 0


def load_json_list(value: str | None) -> tuple[str, ...]:
    """Decode a JSON list-of-strings column, tolerating empty/invalid content."""
    if not value:
        return ()
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        return ()
    if not isinstance(parsed, list):
        return ()
    return tuple(str(x) for x in parsed if x is not None)


def load_json_dict(value: str | None) -> dict[str, Any]:
    """Decode a JSON object column, tolerating empty/invalid content."""
    if not value:
        return {}
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        return {}
    return parsed if isinstance(parsed, dict) else {}


def to_catalog_product(product: Product) -> CatalogProduct:
    """Snapshot an ORM product for scoring."""
    return CatalogProduct(
        pk=product.id,
        product_id=product.product_id,
        sku=product.sku,
        name=product.name,
        brand=product.brand,
        category=product.category,
        unit=product.unit,
        pkg_size=product.pkg_size,
        alt_skus=load_json_list(product.alt_skus_json),
        synonyms=load_json_list(product.synonyms_json),
        upc=product.upc,
    )


def product_alt_skus(product: Product) -> list[str]:
    return list(load_json_list(product.alt_skus_json))


def product_synonyms(product: Product) -> list[str]:
    return list(load_json_list(product.synonyms_json))


async def load_catalog_snapshot(session: AsyncSession) -> list[CatalogProduct]:
    """Load the whole catalog in creation order.

    The order is the tie-break order used by the ranker.
    """
    result = await session.execute(select(Product).order_by(Product.id.asc()))
    return [to_catalog_product(p) for p in result.scalars().all()]


async def find_product_by_sku(session: AsyncSession, sku: str) -> Product | None:
    """Find product by its business SKU."""
    result = await session.execute(select(Product).where(Product.sku == sku))
    return result.scalar_one_or_none()


async def create_product(session: AsyncSession, draft: ProductDraft) -> Product:
    """Create a catalog product.

    Raises:
        DuplicateSkuError: A product with the same SKU already exists.
    """
    sku = draft.sku.strip()
    if await find_product_by_sku(session, sku):
        raise DuplicateSkuError(sku)

    product = Product(
        sku=sku,
        name=draft.name,
        brand=draft.brand,
        category=draft.category,
        unit=draft.unit,
        pkg_size=draft.pkg_size,
        upc=draft.upc,
        attributes_json=json.dumps(draft.attributes or {}, ensure_ascii=False),
        alt_skus_json=json.dumps(list(draft.alt_skus), ensure_ascii=False),
        synonyms_json=json.dumps(list(draft.synonyms), ensure_ascii=False),
    )
    session.add(product)
    await session.flush()
    # Load server-side defaults (created_at) while we're inside the session
    await session.refresh(product)
    return product


async def seed_catalog(session: AsyncSession, drafts: list[ProductDraft]) -> SeedStats:
    """Insert drafts whose SKU is not in the catalog yet (idempotent)."""
    stats = SeedStats()
    for draft in drafts:
        if await find_product_by_sku(session, draft.sku):
            stats.skipped += 1
            continue
        await create_product(session, draft)
        stats.inserted += 1

    logger.info(f"Catalog seed: inserted={stats.inserted} skipped={stats.skipped}")
    return stats


# ============================================================
# Sample catalog (seed script / admin seed endpoint)
# ============================================================

SAMPLE_PRODUCTS: list[ProductDraft] = [
    ProductDraft(
        sku="ACME-X100",
        name="Widget Pro",
        brand="Acme",
        category="Widgets",
        unit="ea",
        pkg_size=1,
        alt_skus=["X100", "ACM-100"],
        synonyms=["acme widget pro", "pro widget"],
        upc="012345678905",
    ),
    ProductDraft(
        sku="ACME-X200",
        name="Widget Max",
        brand="Acme",
        category="Widgets",
        unit="ea",
        pkg_size=1,
        alt_skus=["X200"],
        synonyms=["acme widget max"],
        upc="012345678912",
    ),
    ProductDraft(
        sku="GLB-PAPER-A4-500",
        name="Copy Paper A4 80gsm",
        brand="Globex",
        category="Office Paper",
        unit="ream",
        pkg_size=500,
        attributes={"size": "A4", "weight_gsm": 80},
        alt_skus=["GLBA4500"],
        synonyms=["printer paper", "a4 paper ream"],
        upc="036000291452",
    ),
    ProductDraft(
        sku="INI-USB-64",
        name="USB Flash Drive 64GB",
        brand="Initech",
        category="Storage",
        unit="ea",
        pkg_size=1,
        attributes={"capacity_gb": 64},
        alt_skus=["INIUSB64G"],
        synonyms=["thumb drive", "memory stick"],
    ),
    ProductDraft(
        sku="INI-USB-128",
        name="USB Flash Drive 128GB",
        brand="Initech",
        category="Storage",
        unit="ea",
        pkg_size=1,
        attributes={"capacity_gb": 128},
        alt_skus=["INIUSB128G"],
        synonyms=["thumb drive", "memory stick"],
    ),
    ProductDraft(
        sku="UMB-SANI-500",
        name="Hand Sanitizer Gel 500ml",
        brand="Umbrella",
        category="Hygiene",
        unit="bottle",
        pkg_size=12,
        attributes={"volume_ml": 500},
        alt_skus=["UMBHS500"],
        synonyms=["alcohol gel", "hand gel"],
    ),
    ProductDraft(
        sku="STK-CABLE-HDMI-2M",
        name="HDMI Cable 2m",
        brand="Stark",
        category="Cables",
        unit="ea",
        pkg_size=1,
        attributes={"length_m": 2},
        alt_skus=["STKHDMI2"],
        synonyms=["hdmi lead"],
    ),
]
