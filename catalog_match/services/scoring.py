"""Similarity scoring of an offer against one catalog product.

Signals are additive and evaluated in a fixed order, each appending one
human-readable reason:

1. Identifier hit: primary SKU +1.0, alternate SKU / UPC +0.95
2. Token-set (Jaccard) similarity x 0.8
3. Brand mentioned in the offer description +0.1
4. Package size agrees +0.05

The total is capped (default 1.2). Values above 1.0 are intentional headroom:
"very confident" vs "confident", not a probability.

This module is pure: no I/O, no persistence.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from catalog_match.services.catalog import CatalogProduct, OfferFields
from catalog_match.services.identifiers import IdentifierMatch, match_identifier
from catalog_match.services.normalizer import join_fields, tokenize
from catalog_match.settings import Settings


@dataclass(frozen=True)
class ScoringWeights:
    """Tunable weights; the shape of the contract stays fixed."""

    primary_identifier: float = 1.0
    secondary_identifier: float = 0.95
    token_similarity: float = 0.8
    brand_mention: float = 0.1
    package_size: float = 0.05
    score_cap: float = 1.2

    @classmethod
    def from_settings(cls, settings: Settings) -> ScoringWeights:
        return cls(score_cap=settings.match_score_cap)


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass
class ScoreResult:
    score: float = 0.0
    reasons: list[str] = field(default_factory=list)


def offer_tokens(offer: OfferFields) -> list[str]:
    """Tokens of description, supplier SKU, supplier name and unit of measure."""
    return tokenize(join_fields(offer.description, offer.supplier_sku, offer.supplier, offer.uom))


def product_tokens(product: CatalogProduct) -> list[str]:
    """Tokens of name, brand, category, alternate SKUs, synonyms and UPC."""
    return tokenize(
        join_fields(
            product.name,
            product.brand,
            product.category,
            " ".join(product.alt_skus),
            " ".join(product.synonyms),
            product.upc,
        )
    )


def jaccard(a: list[str], b: list[str]) -> float:
    """Jaccard similarity of two token lists treated as sets (0.0 if both empty)."""
    set_a, set_b = set(a), set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def score_offer_product(
    offer: OfferFields,
    product: CatalogProduct,
    weights: ScoringWeights | None = None,
    *,
    offer_token_list: list[str] | None = None,
) -> ScoreResult:
    """Score an offer against one product.

    Args:
        offer: Matchable offer fields.
        product: Catalog product snapshot.
        weights: Optional weights (defaults to DEFAULT_WEIGHTS).
        offer_token_list: Precomputed offer tokens (the ranker reuses them).

    Returns:
        ScoreResult with the capped score and ordered reasons.
    """
    weights = weights or DEFAULT_WEIGHTS
    result = ScoreResult()

    # 1. Identifier
    hit = match_identifier(offer.supplier_sku, product)
    if hit is not IdentifierMatch.NONE:
        if hit is IdentifierMatch.PRIMARY:
            result.score += weights.primary_identifier
        else:
            result.score += weights.secondary_identifier
        result.reasons.append(f"SKU match: {hit.value}")

    # 2. Token-set similarity
    tokens = offer_token_list if offer_token_list is not None else offer_tokens(offer)
    similarity = jaccard(tokens, product_tokens(product))
    if similarity > 0:
        result.score += similarity * weights.token_similarity
        result.reasons.append(f"Name similarity: {similarity * 100:.0f}%")

    # 3. Brand mention
    if product.brand and product.brand.lower() in (offer.description or "").lower():
        result.score += weights.brand_mention
        result.reasons.append("Brand mention")

    # 4. Package size
    if offer.pack is not None and product.pkg_size is not None and float(offer.pack) == float(product.pkg_size):
        result.score += weights.package_size
        result.reasons.append("Package size matches")

    result.score = min(result.score, weights.score_cap)
    return result
