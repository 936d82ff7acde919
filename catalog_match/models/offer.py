"""Offer model.

Represents one supplier price-list line item awaiting reconciliation against
the product catalog. The original record is kept in `raw_json` for audit.

Status lifecycle:
- new: created, or every candidate was rejected
- needs_review: candidates exist, none approved yet
- matched: exactly one approved match (`best_match_id`)
"""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from catalog_match.stores.postgres import Base


class OfferStatus(str, Enum):
    """Offer reconciliation status."""

    NEW = "new"
    NEEDS_REVIEW = "needs_review"
    MATCHED = "matched"


def generate_offer_id() -> str:
    """Generate unique offer ID."""
    return str(uuid4())


class Offer(Base):
    """Supplier offer (price-list line item)."""

    __tablename__ = "offers"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Public offer ID (used in URLs)
    offer_id: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        default=generate_offer_id,
    )

    # Supplier fields
    supplier: Mapped[str] = mapped_column(String(200))
    supplier_sku: Mapped[str | None] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)
    pack: Mapped[float | None] = mapped_column()  # quantity per package
    uom: Mapped[str | None] = mapped_column(String(50))
    notes: Mapped[str | None] = mapped_column(Text)

    # Pricing
    price: Mapped[float | None] = mapped_column()
    currency: Mapped[str | None] = mapped_column(String(3))

    # Provenance of the raw record (csv, xlsx, text, ai, api) and its payload
    source: Mapped[str] = mapped_column(String(50), default="api")
    raw_json: Mapped[str | None] = mapped_column(Text)

    # Normalized tokens (JSON array)
    tokens_json: Mapped[str] = mapped_column(Text, default="[]")

    # Reconciliation state
    status: Mapped[str] = mapped_column(String(20), index=True, default=OfferStatus.NEW.value)
    best_match_id: Mapped[int | None] = mapped_column(
        ForeignKey("matches.id", use_alter=True, name="fk_offers_best_match_id"),
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Offer {self.offer_id} {self.status}>"
