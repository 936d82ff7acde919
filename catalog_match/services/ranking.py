"""Candidate ranking of one offer against the full catalog.

Ranking logic:
1. Score every product (brute force, O(catalog size) per offer)
2. Sort by score DESC; ties keep catalog order (stable sort)
3. Return the top N (default 3)

No pre-filtering: any product can earn a non-zero text similarity, so
pruning by identifier would change the ranked output.
"""

from dataclasses import dataclass, field

from catalog_match.models import MatchMethod
from catalog_match.services.catalog import CatalogProduct, OfferFields
from catalog_match.services.scoring import ScoringWeights, offer_tokens, score_offer_product

DEFAULT_TOP_N = 3


@dataclass
class Candidate:
    """A proposed product for an offer."""

    product_pk: int
    product_id: str
    score: float
    reasons: list[str] = field(default_factory=list)
    method: str = MatchMethod.HEURISTIC.value


def rank_candidates(
    offer: OfferFields,
    catalog: list[CatalogProduct],
    top_n: int = DEFAULT_TOP_N,
    weights: ScoringWeights | None = None,
) -> list[Candidate]:
    """Score an offer against the catalog and return the best candidates.

    Args:
        offer: Matchable offer fields.
        catalog: Catalog snapshot, in tie-break order.
        top_n: Maximum number of candidates to return.
        weights: Optional scoring weights.

    Returns:
        Up to top_n candidates sorted by score descending.
    """
    if top_n <= 0 or not catalog:
        return []

    tokens = offer_tokens(offer)
    scored = []
    for product in catalog:
        result = score_offer_product(offer, product, weights, offer_token_list=tokens)
        scored.append(
            Candidate(
                product_pk=product.pk,
                product_id=product.product_id,
                score=result.score,
                reasons=result.reasons,
            )
        )

    # list.sort is stable: equal scores keep catalog order
    scored.sort(key=lambda c: c.score, reverse=True)
    return scored[:top_n]
