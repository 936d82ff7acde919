#!/usr/bin/env python3
"""Ingest supplier offer records from a JSON file.

The file holds either a list of records or an object with an "offers" list
(the same body POST /v1/offers/ingest accepts). Each record is matched
against the current catalog; per-record failures are reported, not fatal.

Usage:
  python -m scripts.ingest_json offers.json

Optional env vars:
  MATCH_AUTO_APPROVE_THRESHOLD=0.88
  MATCH_TOP_N=3
"""

import asyncio
import json
import os
import sys
from typing import Any

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv  # noqa: E402

from catalog_match.services.ingestion import ingest_offers  # noqa: E402
from catalog_match.stores.postgres import close_db, get_session, init_db  # noqa: E402

load_dotenv()


def load_records(path: str) -> list[dict[str, Any]]:
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)
    if isinstance(payload, dict):
        payload = payload.get("offers", [])
    if not isinstance(payload, list):
        raise ValueError(f"{path}: expected a list of offer records")
    return payload


async def run(path: str) -> int:
    records = load_records(path)
    await init_db()
    try:
        async with get_session() as session:
            result = await ingest_offers(session, records)
    finally:
        await close_db()

    stats = result.stats
    print(f"\n📥 Ingested {path}")
    print(f"  received:     {stats.received}")
    print(f"  created:      {stats.created}")
    print(f"  auto-matched: {stats.auto_matched}")
    print(f"  needs review: {stats.needs_review}")
    print(f"  unmatched:    {stats.unmatched}")
    print(f"  failed:       {stats.failed}")
    for err in result.errors:
        print(f"  ⚠️  record {err.index}: {err.code} {err.message}")
    return 1 if stats.failed else 0


def main() -> None:
    if len(sys.argv) != 2:
        print("Usage: python -m scripts.ingest_json <file.json>")
        sys.exit(2)
    sys.exit(asyncio.run(run(sys.argv[1])))


if __name__ == "__main__":
    main()
