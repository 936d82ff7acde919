"""Pydantic schemas for API request/response validation."""

from catalog_match.schemas.common import ErrorDetail, ErrorResponse
from catalog_match.schemas.dashboard import (
    DashboardSummary,
    MatchedItem,
    MatchOut,
    OfferOut,
    ProductOut,
    ReviewOutcomeOut,
    ReviewQueueItem,
)
from catalog_match.schemas.products import ProductDraftIn, SeedResponse
from catalog_match.schemas.offers import (
    IngestRequest,
    IngestResponse,
    IngestStats,
    OfferRecord,
    RecordErrorOut,
    RecordSource,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "DashboardSummary",
    "MatchedItem",
    "MatchOut",
    "OfferOut",
    "ProductOut",
    "ReviewOutcomeOut",
    "ReviewQueueItem",
    "IngestRequest",
    "IngestResponse",
    "IngestStats",
    "OfferRecord",
    "RecordErrorOut",
    "RecordSource",
    "ProductDraftIn",
    "SeedResponse",
]
