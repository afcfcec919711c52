"""API schemas for the catalog API.

Pydantic models for response serialization. Request bodies are taken
as raw JSON objects and validated by the catalog core.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict = Field(default_factory=dict, description="Additional error details")
    request_id: str | None = Field(default=None, description="Request ID for correlation")


class SuccessResponse(BaseModel):
    """Acknowledgement for deletes."""

    success: bool = True


# ============================================================================
# Catalog Schemas
# ============================================================================


class VariantResponse(BaseModel):
    """A product variant."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    sku: str
    name: str
    price_cents: int = Field(..., description="Price in cents")
    inventory_count: int
    created_at: datetime
    updated_at: datetime


class ProductResponse(BaseModel):
    """A product with its category name."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    category_id: int | None = None
    category_name: str | None = None
    status: str
    deleted_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ProductDetailResponse(ProductResponse):
    """A product with its variants in creation order."""

    variants: list[VariantResponse] = Field(default_factory=list)


class ProductSummaryResponse(ProductResponse):
    """A listing row with variant aggregates."""

    variant_count: int
    min_price_cents: int | None = None
    max_price_cents: int | None = None
    total_inventory: int = 0


class CategoryResponse(BaseModel):
    """A category."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CategoryWithCountResponse(CategoryResponse):
    """A category with the number of live products in it."""

    product_count: int
