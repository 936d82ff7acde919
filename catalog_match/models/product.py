"""Product model.

A Product is a canonical catalog entry that supplier offers are matched to.
Products are read-only for the matching core; they are created by catalog
seeding, the admin endpoint, or "create product from offer".

Example SKU: "ACME-X100"
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from catalog_match.stores.postgres import Base


def generate_product_id() -> str:
    """Generate unique public product ID."""
    return str(uuid4())


class Product(Base):
    """Canonical catalog product."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Public product ID (used in API payloads)
    product_id: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        default=generate_product_id,
    )

    # Business key
    sku: Mapped[str] = mapped_column(String(200), unique=True, index=True)

    # Descriptive fields
    name: Mapped[str] = mapped_column(String(500))
    brand: Mapped[str] = mapped_column(String(200))
    category: Mapped[str | None] = mapped_column(String(200))
    unit: Mapped[str | None] = mapped_column(String(50))  # e.g. "ea", "case"
    pkg_size: Mapped[int | None] = mapped_column()  # units per package
    upc: Mapped[str | None] = mapped_column(String(50))

    # JSON-serialized text to keep migrations simple
    attributes_json: Mapped[str | None] = mapped_column(Text)  # {"color": "red"}
    alt_skus_json: Mapped[str | None] = mapped_column(Text)  # ["X-100", "X100B"]
    synonyms_json: Mapped[str | None] = mapped_column(Text)  # ["acme widget"]

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Product {self.sku}>"
