"""Ingestion service: raw offer records -> offers + candidate matches.

This is the core pipeline for bringing supplier price lists into the system.

Flow (per record):
1. Validate the record shape (OfferRecord)
2. Normalize description/SKU/supplier/UoM into tokens
3. Persist the Offer with status "new"
4. Rank candidates against the batch's catalog snapshot
5. Persist one Match per candidate, in ranked order, status "candidate"
6. Auto-decision:
   - top score >= threshold -> approve it (open siblings rejected), offer "matched"
   - otherwise, with candidates -> offer "needs_review", provisional best match
   - no candidates -> offer stays "new"

Isolation:
- Each record runs in its own SAVEPOINT; one failing record never rolls back
  or blocks the others. Partial success is the normal outcome.
- The catalog is loaded once per batch so results don't depend on order.

Upstream parsing (CSV/XLSX/AI) happens before this service is called.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_match.models import Match, MatchStatus, Offer, OfferStatus
from catalog_match.schemas.offers import OfferRecord
from catalog_match.services.catalog import CatalogProduct, OfferFields, load_catalog_snapshot
from catalog_match.services.ranking import rank_candidates
from catalog_match.services.review import approve_loaded
from catalog_match.services.scoring import ScoringWeights, offer_tokens
from catalog_match.settings import Settings, get_settings

logger = logging.getLogger("uvicorn.error")


@dataclass
class IngestionConfig:
    """Configuration for an ingestion run."""

    auto_approve_threshold: float = 0.88
    top_n: int = 3
    weights: ScoringWeights = field(default_factory=ScoringWeights)

    @classmethod
    def from_settings(cls, settings: Settings) -> IngestionConfig:
        return cls(
            auto_approve_threshold=settings.match_auto_approve_threshold,
            top_n=settings.match_top_n,
            weights=ScoringWeights.from_settings(settings),
        )


@dataclass
class RecordError:
    index: int
    code: str
    message: str


@dataclass
class IngestionStats:
    """Statistics from an ingestion run."""

    received: int = 0
    created: int = 0
    auto_matched: int = 0
    needs_review: int = 0
    unmatched: int = 0
    failed: int = 0


@dataclass
class IngestionResult:
    stats: IngestionStats
    created_offer_ids: list[str] = field(default_factory=list)
    errors: list[RecordError] = field(default_factory=list)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


async def ingest_offers(
    session: AsyncSession,
    records: list[Any],
    config: IngestionConfig | None = None,
) -> IngestionResult:
    """Ingest a batch of raw offer records.

    Args:
        session: DB session (caller controls commit/rollback).
        records: Raw records (any JSON value or an already-validated OfferRecord).
            Non-object values are reported as INVALID_RECORD.
        config: Optional ingestion configuration (defaults from settings).

    Returns:
        IngestionResult with counts, created offer IDs and per-record errors.
    """
    config = config or IngestionConfig.from_settings(get_settings())
    result = IngestionResult(stats=IngestionStats(received=len(records)))

    catalog = await load_catalog_snapshot(session)
    logger.info(f"Starting ingestion: records={len(records)} catalog_size={len(catalog)}")

    for index, item in enumerate(records):
        try:
            record = item if isinstance(item, OfferRecord) else OfferRecord.model_validate(item)
        except ValidationError as e:
            result.stats.failed += 1
            result.errors.append(RecordError(index=index, code="INVALID_RECORD", message=_format_validation_error(e)))
            continue

        try:
            async with session.begin_nested():
                offer = await _ingest_record(session, record, catalog, config)
        except Exception as e:
            logger.exception(f"Error ingesting record index={index}")
            result.stats.failed += 1
            result.errors.append(RecordError(index=index, code="PROCESSING_FAILED", message=str(e)))
            continue

        result.stats.created += 1
        result.created_offer_ids.append(offer.offer_id)
        if offer.status == OfferStatus.MATCHED.value:
            result.stats.auto_matched += 1
        elif offer.status == OfferStatus.NEEDS_REVIEW.value:
            result.stats.needs_review += 1
        else:
            result.stats.unmatched += 1

    logger.info(
        f"Ingestion complete: created={result.stats.created}, auto_matched={result.stats.auto_matched}, "
        f"needs_review={result.stats.needs_review}, unmatched={result.stats.unmatched}, failed={result.stats.failed}"
    )
    return result


async def _ingest_record(
    session: AsyncSession,
    record: OfferRecord,
    catalog: list[CatalogProduct],
    config: IngestionConfig,
) -> Offer:
    """Persist one offer, its candidate matches and the auto-decision."""
    fields = OfferFields(
        description=record.description,
        supplier=record.supplier,
        supplier_sku=record.supplier_sku,
        uom=record.uom,
        pack=record.pack,
    )
    tokens = offer_tokens(fields)

    offer = Offer(
        supplier=record.supplier,
        supplier_sku=record.supplier_sku,
        description=record.description,
        pack=record.pack,
        uom=record.uom,
        price=record.price,
        currency=record.currency,
        notes=record.notes,
        source=record.source.value,
        raw_json=json.dumps(record.raw, ensure_ascii=False) if record.raw is not None else None,
        tokens_json=json.dumps(tokens, ensure_ascii=False),
        status=OfferStatus.NEW.value,
    )
    session.add(offer)
    await session.flush()

    candidates = rank_candidates(fields, catalog, top_n=config.top_n, weights=config.weights)
    if not candidates:
        return offer

    matches: list[Match] = []
    for candidate in candidates:
        match = Match(
            offer_id=offer.id,
            product_id=candidate.product_pk,
            score=candidate.score,
            method=candidate.method,
            reasons_json=json.dumps(candidate.reasons, ensure_ascii=False),
            status=MatchStatus.CANDIDATE.value,
        )
        session.add(match)
        matches.append(match)
    # Flush in ranked order so creation order preserves rank
    await session.flush()

    top = matches[0]
    if top.score >= config.auto_approve_threshold:
        await approve_loaded(session, offer, matches, top)
    else:
        offer.status = OfferStatus.NEEDS_REVIEW.value
        offer.best_match_id = top.id
        await session.flush()
    return offer
