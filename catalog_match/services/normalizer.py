"""Text normalization for matching.

Turns free text (offer descriptions, product names, identifiers) into a
canonical token sequence:

1. Lowercase
2. "&" -> "and"
3. Any run of non-alphanumeric characters (Unicode aware) -> single space
4. Split on whitespace
5. Strip trailing unit suffixes ("500ml" -> "500", "12in" -> "12")
6. Drop tokens that end up empty

Order and duplicates are preserved; set semantics belong to the scorer.
"""

import re

# Longest suffixes first so "kg" wins over "g" and "inch" over "in".
UNIT_SUFFIXES = ("inch", "gb", "tb", "ml", "kg", "mm", "cm", "in", "l", "g", '"', "'")

_UNIT_SUFFIX_RE = re.compile("(?:" + "|".join(re.escape(s) for s in UNIT_SUFFIXES) + ")$")

# \W is "not a word character"; word characters include "_", so add it back.
_NON_ALNUM_RE = re.compile(r"[\W_]+", re.UNICODE)

_IDENTIFIER_NOISE_RE = re.compile(r"[\s\-_]+")


def strip_unit_suffix(token: str) -> str:
    """Strip unit suffixes until none remains.

    Repeated stripping keeps the operation idempotent:
    strip_unit_suffix(strip_unit_suffix(t)) == strip_unit_suffix(t).
    """
    while True:
        stripped = _UNIT_SUFFIX_RE.sub("", token, count=1)
        if stripped == token:
            return token
        token = stripped


def tokenize(text: str | None) -> list[str]:
    """Normalize free text into a token sequence.

    Example:
        >>> tokenize("Acme Widget 500ml & Co.")
        ['acme', 'widget', '500', 'and', 'co']
    """
    if not text:
        return []
    norm = text.lower().replace("&", " and ")
    norm = _NON_ALNUM_RE.sub(" ", norm).strip()
    tokens = (strip_unit_suffix(t) for t in norm.split())
    return [t for t in tokens if t]


def normalize_identifier(value: str | None) -> str:
    """Normalize a SKU/UPC for exact comparison ("X-100 b" -> "x100b")."""
    if not value:
        return ""
    return _IDENTIFIER_NOISE_RE.sub("", value.lower())


def join_fields(*parts: str | None) -> str:
    """Join the non-empty parts with single spaces."""
    return " ".join(p for p in parts if p)
