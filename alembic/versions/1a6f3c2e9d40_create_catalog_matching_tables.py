"""create_catalog_matching_tables

Revision ID: 1a6f3c2e9d40
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "1a6f3c2e9d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.String(length=100), nullable=False),
        sa.Column("sku", sa.String(length=200), nullable=False),
        sa.Column("name", sa.String(length=500), nullable=False),
        sa.Column("brand", sa.String(length=200), nullable=False),
        sa.Column("category", sa.String(length=200), nullable=True),
        sa.Column("unit", sa.String(length=50), nullable=True),
        sa.Column("pkg_size", sa.Integer(), nullable=True),
        sa.Column("upc", sa.String(length=50), nullable=True),
        sa.Column("attributes_json", sa.Text(), nullable=True),
        sa.Column("alt_skus_json", sa.Text(), nullable=True),
        sa.Column("synonyms_json", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_products_product_id"), "products", ["product_id"], unique=True)
    op.create_index(op.f("ix_products_sku"), "products", ["sku"], unique=True)

    op.create_table(
        "offers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("offer_id", sa.String(length=100), nullable=False),
        sa.Column("supplier", sa.String(length=200), nullable=False),
        sa.Column("supplier_sku", sa.String(length=200), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("pack", sa.Float(), nullable=True),
        sa.Column("uom", sa.String(length=50), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("currency", sa.String(length=3), nullable=True),
        sa.Column("source", sa.String(length=50), nullable=False),
        sa.Column("raw_json", sa.Text(), nullable=True),
        sa.Column("tokens_json", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("best_match_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_offers_offer_id"), "offers", ["offer_id"], unique=True)
    op.create_index(op.f("ix_offers_status"), "offers", ["status"], unique=False)

    op.create_table(
        "matches",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("match_id", sa.String(length=100), nullable=False),
        sa.Column("offer_id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("method", sa.String(length=30), nullable=False),
        sa.Column("reasons_json", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["offer_id"], ["offers.id"]),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_matches_match_id"), "matches", ["match_id"], unique=True)
    op.create_index(op.f("ix_matches_offer_id"), "matches", ["offer_id"], unique=False)
    op.create_index(op.f("ix_matches_product_id"), "matches", ["product_id"], unique=False)

    # offers <-> matches reference each other; close the cycle once both exist
    op.create_foreign_key(
        "fk_offers_best_match_id",
        "offers",
        "matches",
        ["best_match_id"],
        ["id"],
    )


def downgrade() -> None:
    op.drop_constraint("fk_offers_best_match_id", "offers", type_="foreignkey")

    op.drop_index(op.f("ix_matches_product_id"), table_name="matches")
    op.drop_index(op.f("ix_matches_offer_id"), table_name="matches")
    op.drop_index(op.f("ix_matches_match_id"), table_name="matches")
    op.drop_table("matches")

    op.drop_index(op.f("ix_offers_status"), table_name="offers")
    op.drop_index(op.f("ix_offers_offer_id"), table_name="offers")
    op.drop_table("offers")

    op.drop_index(op.f("ix_products_sku"), table_name="products")
    op.drop_index(op.f("ix_products_product_id"), table_name="products")
    op.drop_table("products")
