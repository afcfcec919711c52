"""SQLAlchemy models for the product catalog.

Defines Category, Product and Variant tables for persistent storage.
"""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_core.infrastructure.database import Base

# Largest value an Integer column holds on every supported engine
MAX_INTEGER = 2**31 - 1


def fits_integer_column(value: int) -> bool:
    """Whether ``value`` can be bound to an Integer column."""
    return -MAX_INTEGER - 1 <= value <= MAX_INTEGER


def utcnow() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


class ProductStatus(str, Enum):
    """Product lifecycle status."""

    ACTIVE = "active"
    DRAFT = "draft"
    ARCHIVED = "archived"


class Category(Base):
    """Category grouping products.

    Attributes:
        id: Category identifier.
        name: Display name.
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)

    products: Mapped[list["Product"]] = relationship("Product", back_populates="category")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, name={self.name})>"


class Product(Base):
    """Product in the catalog.

    A product always owns at least one variant once created. Rows are
    never physically removed: ``deleted_at`` marks soft deletion.

    Attributes:
        id: Product identifier.
        name: Product name (stored trimmed).
        description: Optional description.
        category_id: Optional category; NULL means uncategorised.
        status: One of ProductStatus values.
        deleted_at: Soft deletion timestamp.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        nullable=True,
        index=True,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ProductStatus.ACTIVE.value,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Relationships
    category: Mapped["Category"] = relationship("Category", back_populates="products")
    variants: Mapped[list["Variant"]] = relationship("Variant", back_populates="product")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, name={self.name[:30]})>"


class Variant(Base):
    """SKU variant of a product.

    The SKU is unique across the whole catalog, not per product. The
    UNIQUE constraint is the authoritative guard against concurrent
    writers; pre-write checks only make the error friendlier.

    Attributes:
        id: Variant identifier.
        product_id: Owning product.
        sku: Stock keeping unit (stored trimmed).
        name: Variant name (e.g., "Red, Large").
        price_cents: Price in cents.
        inventory_count: Units on hand.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "variants"
    __table_args__ = (UniqueConstraint("sku", name="uq_variants_sku"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id"),
        nullable=False,
        index=True,
    )
    sku: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    price_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    inventory_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Relationships
    product: Mapped["Product"] = relationship("Product", back_populates="variants")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Variant(id={self.id}, sku={self.sku})>"
