from catalog_match.services.catalog import CatalogProduct
from catalog_match.services.identifiers import IdentifierMatch, match_identifier

PRODUCT = CatalogProduct(
    pk=1,
    product_id="p-1",
    sku="ACME-X100",
    name="Widget Pro",
    brand="Acme",
    alt_skus=("X100", "ACM-100"),
    upc="012345678905",
)


class TestMatchIdentifier:
    def test_primary_sku_ignores_case_and_separators(self):
        assert match_identifier("acme x100", PRODUCT) is IdentifierMatch.PRIMARY
        assert match_identifier("ACME_X100", PRODUCT) is IdentifierMatch.PRIMARY

    def test_alternate_sku(self):
        assert match_identifier("acm_100", PRODUCT) is IdentifierMatch.ALTERNATE
        assert match_identifier("x100", PRODUCT) is IdentifierMatch.ALTERNATE

    def test_upc(self):
        assert match_identifier("0123-4567-8905", PRODUCT) is IdentifierMatch.UPC

    def test_primary_wins_over_alternate(self):
        product = CatalogProduct(pk=2, product_id="p-2", sku="X1", name="n", brand="b", alt_skus=("X1",))
        assert match_identifier("x1", product) is IdentifierMatch.PRIMARY

    def test_no_match(self):
        assert match_identifier("Z999", PRODUCT) is IdentifierMatch.NONE

    def test_missing_supplier_sku(self):
        assert match_identifier(None, PRODUCT) is IdentifierMatch.NONE
        assert match_identifier(" - ", PRODUCT) is IdentifierMatch.NONE

    def test_product_without_upc(self):
        product = CatalogProduct(pk=3, product_id="p-3", sku="S", name="n", brand="b")
        assert match_identifier("012345678905", product) is IdentifierMatch.NONE
