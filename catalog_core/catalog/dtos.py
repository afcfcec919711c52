"""Catalog data transfer objects.

Plain snapshots of rows returned by the reader; they carry no session
state and can outlive the session that produced them.
"""

from dataclasses import dataclass, field
from datetime import datetime

from catalog_core.catalog.models import Product, Variant


@dataclass
class CategoryDTO:
    """Category data transfer object."""

    id: int
    name: str
    product_count: int | None = None


@dataclass
class VariantDTO:
    """Variant data transfer object."""

    id: int
    product_id: int
    sku: str
    name: str
    price_cents: int
    inventory_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, variant: Variant) -> "VariantDTO":
        """Snapshot a Variant row."""
        return cls(
            id=variant.id,
            product_id=variant.product_id,
            sku=variant.sku,
            name=variant.name,
            price_cents=variant.price_cents,
            inventory_count=variant.inventory_count,
            created_at=variant.created_at,
            updated_at=variant.updated_at,
        )


@dataclass
class ProductDTO:
    """Product with its category name and, for detail reads, its variants."""

    id: int
    name: str
    description: str | None
    category_id: int | None
    category_name: str | None
    status: str
    deleted_at: datetime | None
    created_at: datetime
    updated_at: datetime
    variants: list[VariantDTO] = field(default_factory=list)

    @classmethod
    def from_model(
        cls,
        product: Product,
        category_name: str | None,
        variants: list[VariantDTO] | None = None,
    ) -> "ProductDTO":
        """Snapshot a Product row."""
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            category_id=product.category_id,
            category_name=category_name,
            status=product.status,
            deleted_at=product.deleted_at,
            created_at=product.created_at,
            updated_at=product.updated_at,
            variants=variants or [],
        )


@dataclass
class ProductSummaryDTO:
    """Listing row: product plus variant aggregates."""

    id: int
    name: str
    description: str | None
    category_id: int | None
    category_name: str | None
    status: str
    deleted_at: datetime | None
    created_at: datetime
    updated_at: datetime
    variant_count: int
    min_price_cents: int | None
    max_price_cents: int | None
    total_inventory: int
