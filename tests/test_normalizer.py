import pytest

from catalog_match.services.normalizer import join_fields, normalize_identifier, strip_unit_suffix, tokenize


def test_tokenize_basic():
    assert tokenize("Acme Widget 500ml & Co.") == ["acme", "widget", "500", "and", "co"]


def test_tokenize_empty():
    assert tokenize(None) == []
    assert tokenize("") == []
    assert tokenize("  -- // ") == []


def test_tokenize_splits_on_underscore_and_punctuation():
    assert tokenize("foo_bar/baz-qux") == ["foo", "bar", "baz", "qux"]


def test_tokenize_keeps_unicode_letters():
    assert tokenize("Café Crème 1L") == ["café", "crème", "1"]


def test_tokenize_drops_tokens_emptied_by_unit_stripping():
    assert tokenize("500 ml bottle") == ["500", "bottle"]


def test_tokenize_preserves_order_and_duplicates():
    assert tokenize("pro Pro PRO") == ["pro", "pro", "pro"]


@pytest.mark.parametrize(
    "token,expected",
    [
        ("500ml", "500"),
        ("2kg", "2"),
        ("64gb", "64"),
        ("12inch", "12"),
        ("12in", "12"),
        ('27"', "27"),
        ("widget", "widget"),
    ],
)
def test_strip_unit_suffix(token: str, expected: str):
    assert strip_unit_suffix(token) == expected


@pytest.mark.parametrize("token", ["500ml", "12in", "hall", "1lg", "ml", "acme"])
def test_strip_unit_suffix_is_idempotent(token: str):
    once = strip_unit_suffix(token)
    assert strip_unit_suffix(once) == once


def test_repeated_stripping_erodes_words_ending_in_unit_letters():
    # Every trailing "l"/"g" goes, not just the last one
    assert strip_unit_suffix("ball") == "ba"
    assert tokenize("ball cell egg gall") == ["ba", "ce", "e", "ga"]


def test_tokenize_is_idempotent_on_joined_output():
    tokens = tokenize("Hand Sanitizer Gel 500ml, 12 pack")
    assert tokenize(" ".join(tokens)) == tokens


def test_normalize_identifier():
    assert normalize_identifier("X-100 b") == "x100b"
    assert normalize_identifier("acm_100") == "acm100"
    assert normalize_identifier(None) == ""
    assert normalize_identifier("") == ""


def test_join_fields_skips_empty_parts():
    assert join_fields("a", None, "", "b") == "a b"
    assert join_fields() == ""
