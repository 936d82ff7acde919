"""Schemas for offer ingestion (/v1/offers/ingest).

`OfferRecord` is the contract with upstream parsers (CSV/XLSX/text/AI
extraction). Records are validated one by one during ingestion so that a
malformed record never fails the whole batch.
"""

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class RecordSource(str, Enum):
    """Which upstream collaborator produced the raw record."""

    CSV = "csv"
    XLSX = "xlsx"
    TEXT = "text"
    AI = "ai"
    API = "api"


class OfferRecord(BaseModel):
    """One raw supplier line item."""

    supplier: str
    supplier_sku: str | None = Field(alias="supplierSku", default=None)
    description: str
    pack: float | None = Field(default=None, gt=0)
    uom: str | None = None
    price: float | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, max_length=3)
    notes: str | None = None
    raw: Any = None
    source: RecordSource = RecordSource.API

    model_config = {"populate_by_name": True, "str_strip_whitespace": True}

    @field_validator("supplier_sku", "uom", "currency", "notes", mode="before")
    @classmethod
    def _blank_to_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("supplier", "description")
    @classmethod
    def _require_text(cls, v: str, info: ValidationInfo) -> str:
        if not v:
            raise ValueError(f"{info.field_name} is required")
        return v

    @field_validator("pack", "price")
    @classmethod
    def _require_finite(cls, v: float | None) -> float | None:
        if v is not None and not math.isfinite(v):
            raise ValueError("must be a finite number")
        return v

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, v: str | None) -> str | None:
        return v.upper() if v else v


class IngestRequest(BaseModel):
    """Request body for batch ingestion.

    Records are kept as arbitrary JSON values here; each one is validated
    against OfferRecord individually by the ingestion service.
    """

    offers: list[Any] = Field(default_factory=list, max_length=5000)


class RecordErrorOut(BaseModel):
    index: int
    code: str
    message: str


class IngestStats(BaseModel):
    received: int
    created: int
    auto_matched: int = Field(alias="autoMatched")
    needs_review: int = Field(alias="needsReview")
    unmatched: int
    failed: int

    model_config = {"populate_by_name": True}


class IngestResponse(BaseModel):
    """Response from ingestion endpoint (partial success is normal)."""

    success: bool
    created: list[str] = Field(default_factory=list)
    stats: IngestStats
    errors: list[RecordErrorOut] = Field(default_factory=list)
