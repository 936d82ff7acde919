"""Admin endpoints for catalog management.

These endpoints are intended for manual testing and admin operations.
In production, consider adding authentication (API key or admin token).
"""

import logging

from fastapi import APIRouter

from catalog_match.schemas import ProductDraftIn, ProductOut, SeedResponse
from catalog_match.services.catalog import SAMPLE_PRODUCTS, ProductDraft, create_product, find_product_by_sku, seed_catalog
from catalog_match.services.dashboard import product_out
from catalog_match.services.errors import ProductNotFoundError
from catalog_match.stores.postgres import get_session

router = APIRouter()
logger = logging.getLogger("uvicorn.error")


@router.post("/catalog/seed", response_model=SeedResponse)
async def seed_sample_catalog() -> SeedResponse:
    """Seed the built-in sample catalog (existing SKUs are skipped)."""
    async with get_session() as session:
        stats = await seed_catalog(session, SAMPLE_PRODUCTS)
    return SeedResponse(success=True, inserted=stats.inserted, skipped=stats.skipped)


@router.post("/products", response_model=ProductOut, status_code=201)
async def create_catalog_product(request: ProductDraftIn) -> ProductOut:
    """Create a catalog product. SKUs are unique (409 on conflict)."""
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
    async with get_session() as session:
        product = await create_product(session, draft)
        logger.info(f"[admin] product created sku={product.sku}")
        return product_out(product)


@router.get("/products/{sku}", response_model=ProductOut)
async def get_catalog_product(sku: str) -> ProductOut:
    """Get a catalog product by SKU."""
    async with get_session() as session:
        product = await find_product_by_sku(session, sku)
        if not product:
            raise ProductNotFoundError(sku)
        return product_out(product)
