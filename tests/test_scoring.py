import pytest

from catalog_match.services.catalog import CatalogProduct, OfferFields
from catalog_match.services.scoring import ScoringWeights, jaccard, score_offer_product
from catalog_match.settings import Settings

# Product tokens: {widget, pro, acme, x100, acm, 100}
PRODUCT = CatalogProduct(
    pk=1,
    product_id="p-1",
    sku="ACME-X100",
    name="Widget Pro",
    brand="Acme",
    pkg_size=1,
    alt_skus=("X100", "ACM-100"),
)


def test_jaccard():
    assert jaccard([], []) == 0.0
    assert jaccard(["a", "b"], ["b", "c"]) == pytest.approx(1 / 3)
    assert jaccard(["a", "a", "b"], ["a", "b"]) == 1.0


class TestScoreOfferProduct:
    def test_primary_sku_hit_is_capped(self):
        offer = OfferFields(description="Acme Widget Pro", supplier_sku="ACME-X100")
        result = score_offer_product(offer, PRODUCT)
        assert result.score == pytest.approx(1.2)
        assert result.reasons == ["SKU match: primary", "Name similarity: 67%", "Brand mention"]

    def test_custom_cap(self):
        offer = OfferFields(description="Acme Widget Pro", supplier_sku="ACME-X100")
        result = score_offer_product(offer, PRODUCT, ScoringWeights(score_cap=1.0))
        assert result.score == pytest.approx(1.0)

    def test_alternate_sku_hit(self):
        offer = OfferFields(description="zzz", supplier_sku="X100")
        result = score_offer_product(offer, PRODUCT)
        # 0.95 + (1/7 * 0.8)
        assert result.score == pytest.approx(0.95 + 0.8 / 7)
        assert result.reasons == ["SKU match: alternate", "Name similarity: 14%"]

    def test_text_brand_and_pack_signals(self):
        offer = OfferFields(description="acme widget pro", pack=1.0)
        result = score_offer_product(offer, PRODUCT)
        assert result.score == pytest.approx(0.5 * 0.8 + 0.1 + 0.05)
        assert result.reasons == ["Name similarity: 50%", "Brand mention", "Package size matches"]

    def test_brand_mention_is_case_insensitive(self):
        offer = OfferFields(description="ACME thing")
        result = score_offer_product(offer, PRODUCT)
        assert "Brand mention" in result.reasons

    def test_pack_mismatch(self):
        offer = OfferFields(description="widget", pack=6)
        result = score_offer_product(offer, PRODUCT)
        assert "Package size matches" not in result.reasons

    def test_no_signal_scores_zero(self):
        offer = OfferFields(description="hdmi cable")
        result = score_offer_product(offer, PRODUCT)
        assert result.score == 0.0
        assert result.reasons == []

    def test_supplier_and_uom_feed_token_similarity(self):
        offer = OfferFields(description="thing", supplier="Acme", uom="pro")
        result = score_offer_product(offer, PRODUCT)
        # {thing, acme, pro} vs 6 product tokens -> 2/7
        assert result.reasons == ["Name similarity: 29%"]


def test_weights_from_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("MATCH_SCORE_CAP", "1.5")
    weights = ScoringWeights.from_settings(Settings())
    assert weights.score_cap == 1.5
    assert weights.primary_identifier == 1.0
