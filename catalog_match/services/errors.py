"""Domain errors raised by the matching services.

Each error carries a stable `code` (used in the API error envelope) and the
HTTP status the API maps it to. Routes never need to catch these: the app
registers one handler for `MatchingError`.
"""

from typing import Any


class MatchingError(RuntimeError):
    """Base class for recoverable matching/review errors."""

    code = "MATCHING_ERROR"
    status_code = 400

    def __init__(self, message: str, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or {}


class NotFoundError(MatchingError):
    code = "NOT_FOUND"
    status_code = 404


class MatchNotFoundError(NotFoundError):
    code = "MATCH_NOT_FOUND"

    def __init__(self, match_id: str) -> None:
        super().__init__(f"Match {match_id} not found", {"match_id": match_id})


class OfferNotFoundError(NotFoundError):
    code = "OFFER_NOT_FOUND"

    def __init__(self, offer_id: str) -> None:
        super().__init__(f"Offer {offer_id} not found", {"offer_id": offer_id})


class ProductNotFoundError(NotFoundError):
    code = "PRODUCT_NOT_FOUND"

    def __init__(self, sku: str) -> None:
        super().__init__(f"Product {sku} not found", {"sku": sku})


class DuplicateSkuError(MatchingError):
    code = "DUPLICATE_SKU"
    status_code = 409

    def __init__(self, sku: str) -> None:
        super().__init__(f"Product with SKU {sku} already exists", {"sku": sku})


class InvalidTransitionError(MatchingError):
    """A decision would move a match out of a terminal state."""

    code = "INVALID_TRANSITION"
    status_code = 409


class ReviewInProgressError(MatchingError):
    code = "REVIEW_IN_PROGRESS"
    status_code = 409

    def __init__(self, offer_id: str) -> None:
        super().__init__(
            f"Another review action is in progress for offer {offer_id}",
            {"offer_id": offer_id},
        )
