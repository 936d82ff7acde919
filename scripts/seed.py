#!/usr/bin/env python3
"""Seed database with the sample product catalog.

Creates:
- Sample catalog products (widgets, paper, storage, hygiene, cables)

The seed is idempotent: products whose SKU already exists are skipped.

Usage:
    python -m scripts.seed
    python -m scripts.seed --create-tables   # local/dev databases without migrations
"""

import argparse
import asyncio
import os
import sys

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from catalog_match.services.catalog import SAMPLE_PRODUCTS, seed_catalog
from catalog_match.stores.postgres import close_db, create_tables, get_session, init_db

load_dotenv()


async def seed_database(*, create: bool = False) -> None:
    """Seed the sample catalog."""
    await init_db()
    try:
        if create:
            await create_tables()

        print("\n🌱 Seeding catalog...")
        async with get_session() as session:
            stats = await seed_catalog(session, SAMPLE_PRODUCTS)

        print(f"  ✅ inserted: {stats.inserted}")
        print(f"  ⏭️  skipped (exists): {stats.skipped}")
    finally:
        await close_db()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the sample product catalog")
    parser.add_argument("--create-tables", action="store_true", help="Create tables before seeding")
    args = parser.parse_args()
    asyncio.run(seed_database(create=args.create_tables))


if __name__ == "__main__":
    main()
