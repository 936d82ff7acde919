"""SQLAlchemy ORM models.

Models represent database tables:
- products: Canonical catalog entries
- offers: Supplier price-list line items
- matches: Scored offer -> product links (candidate/approved/rejected)
"""

from catalog_match.models.match import Match, MatchMethod, MatchStatus
from catalog_match.models.offer import Offer, OfferStatus
from catalog_match.models.product import Product

__all__ = ["Match", "MatchMethod", "MatchStatus", "Offer", "OfferStatus", "Product"]
