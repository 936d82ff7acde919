"""Exact identifier matching between a supplier SKU and a catalog product.

Identifiers are compared after normalization (lowercase, no whitespace,
hyphens or underscores). Check order is fixed because the scorer weights a
primary SKU hit above alternate/UPC hits:

1. product.sku      -> PRIMARY
2. product.alt_skus -> ALTERNATE
3. product.upc      -> UPC
"""

from enum import Enum

from catalog_match.services.catalog import CatalogProduct
from catalog_match.services.normalizer import normalize_identifier


class IdentifierMatch(Enum):
    """Kind of identifier hit."""

    PRIMARY = "primary"
    ALTERNATE = "alternate"
    UPC = "upc"
    NONE = "none"


def match_identifier(supplier_sku: str | None, product: CatalogProduct) -> IdentifierMatch:
    """Return the first identifier kind the supplier SKU matches exactly."""
    needle = normalize_identifier(supplier_sku)
    if not needle:
        return IdentifierMatch.NONE

    if needle == normalize_identifier(product.sku):
        return IdentifierMatch.PRIMARY

    if any(needle == normalize_identifier(alt) for alt in product.alt_skus):
        return IdentifierMatch.ALTERNATE

    if product.upc and needle == normalize_identifier(product.upc):
        return IdentifierMatch.UPC

    return IdentifierMatch.NONE
