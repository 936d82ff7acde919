"""Match model.

A scored, directional link from one Offer to one Product. Matches are never
deleted: review decisions only move them from `candidate` to `approved` or
`rejected`, so the table doubles as the audit trail.
"""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from catalog_match.stores.postgres import Base


class MatchStatus(str, Enum):
    """Match review status. APPROVED and REJECTED are terminal."""

    CANDIDATE = "candidate"
    APPROVED = "approved"
    REJECTED = "rejected"


class MatchMethod(str, Enum):
    """How a match was proposed."""

    HEURISTIC = "heuristic"
    MANUAL_CREATE = "manual-create"


def generate_match_id() -> str:
    """Generate unique match ID."""
    return str(uuid4())


class Match(Base):
    """Candidate link between an offer and a catalog product."""

    __tablename__ = "matches"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Public match ID (used in review URLs)
    match_id: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        default=generate_match_id,
    )

    # Relations
    offer_id: Mapped[int] = mapped_column(ForeignKey("offers.id"), index=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"), index=True)

    # Scoring
    score: Mapped[float] = mapped_column()
    method: Mapped[str] = mapped_column(String(30), default=MatchMethod.HEURISTIC.value)
    reasons_json: Mapped[str] = mapped_column(Text, default="[]")  # ordered list

    # Review state
    status: Mapped[str] = mapped_column(String(20), default=MatchStatus.CANDIDATE.value)

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
        return f"<Match {self.match_id} {self.status} {self.score:.3f}>"
