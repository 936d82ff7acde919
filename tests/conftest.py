"""Shared fixtures: in-memory SQLite database, a small catalog and an API client."""

import pytest
from httpx import ASGITransport, AsyncClient

from catalog_match.services.catalog import ProductDraft, create_product
from catalog_match.settings import get_settings
from catalog_match.stores.postgres import close_db, create_tables, drop_tables, get_session, init_db

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PRODUCTS = [
    ProductDraft(sku="ACME-X100", name="Widget Pro", brand="Acme", pkg_size=1, alt_skus=["X100"]),
    ProductDraft(sku="ACME-X200", name="Widget Max", brand="Acme", pkg_size=1, alt_skus=["X200"]),
    ProductDraft(sku="INI-USB-64", name="USB Flash Drive 64GB", brand="Initech", pkg_size=1),
]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Isolate settings from the developer's .env; no Redis needed."""
    monkeypatch.setenv("DATABASE_URL", TEST_DATABASE_URL)
    monkeypatch.setenv("REVIEW_LOCKS_ENABLED", "false")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def db():
    """Fresh in-memory database with all tables."""
    await init_db(TEST_DATABASE_URL)
    await create_tables()
    yield
    await drop_tables()
    await close_db()


@pytest.fixture
async def catalog(db):
    """Three products: two Acme widgets and an Initech USB drive."""
    async with get_session() as session:
        for draft in TEST_PRODUCTS:
            await create_product(session, draft)
    return TEST_PRODUCTS


@pytest.fixture
async def client(db):
    """Create test client (lifespan is not run; the db fixture owns the engine)."""
    from catalog_match.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# Records used across ingestion/review/dashboard tests:
# - index 0 hits ACME-X100 by primary SKU and is auto-approved
# - index 1 only shares tokens with the widgets and lands in review
EXACT_SKU_RECORD = {
    "supplier": "Metro Supply",
    "supplierSku": "ACME-X100",
    "description": "Acme Widget Pro",
    "pack": 1,
    "price": 9.5,
    "currency": "usd",
}
FUZZY_RECORD = {
    "supplier": "Metro Supply",
    "description": "widget max",
}


@pytest.fixture
def offer_records() -> list[dict]:
    return [dict(EXACT_SKU_RECORD), dict(FUZZY_RECORD)]
