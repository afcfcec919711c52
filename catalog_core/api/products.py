"""Product API endpoints.

Provides endpoints for the product lifecycle:
- GET /api/products - list live products with aggregates
- POST /api/products - create a product with its variants
- GET /api/products/{id} - product details with variants
- PUT /api/products/{id} - partial update
- DELETE /api/products/{id} - soft delete
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Request, status

from catalog_core.api.dependencies import get_service
from catalog_core.api.errors import unwrap
from catalog_core.api.schemas import (
    ErrorResponse,
    ProductDetailResponse,
    ProductResponse,
    ProductSummaryResponse,
    SuccessResponse,
)
from catalog_core.catalog.reader import ProductFilter
from catalog_core.catalog.service import CatalogService

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get(
    "",
    response_model=list[ProductSummaryResponse],
    summary="List products",
    description="List products that are not soft-deleted, newest first, "
    "with category name and variant price/inventory aggregates.",
)
async def list_products(
    request: Request,
    service: Annotated[CatalogService, Depends(get_service)],
    search: str | None = Query(default=None, description="Substring of name or description"),
    category_id: int | None = Query(default=None, description="Filter by category"),
) -> list[ProductSummaryResponse]:
    """List products.

    Args:
        request: Incoming request.
        service: Catalog service.
        search: Search term.
        category_id: Category filter.

    Returns:
        Product summaries.
    """
    result = await service.list_products(ProductFilter(search=search, category_id=category_id))
    return [ProductSummaryResponse.model_validate(p) for p in unwrap(result, request)]


@router.post(
    "",
    response_model=ProductDetailResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Create product",
    description="Create a product and its variants in one atomic write.",
)
async def create_product(
    request: Request,
    service: Annotated[CatalogService, Depends(get_service)],
    payload: Any = Body(...),
) -> ProductDetailResponse:
    """Create a product.

    Args:
        request: Incoming request.
        service: Catalog service.
        payload: Raw request body, validated by the catalog core.

    Returns:
        Created product with variants.

    Raises:
        HTTPException: On invalid input (400) or SKU conflict (409).
    """
    result = await service.create_product(payload)
    return ProductDetailResponse.model_validate(unwrap(result, request))


@router.get(
    "/{product_id}",
    response_model=ProductDetailResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
)
async def get_product(
    product_id: int,
    request: Request,
    service: Annotated[CatalogService, Depends(get_service)],
) -> ProductDetailResponse:
    """Get a product by id, including soft-deleted products."""
    result = await service.get_product(product_id)
    return ProductDetailResponse.model_validate(unwrap(result, request))


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Update product",
    description="Merge the supplied fields into the product.",
)
async def update_product(
    product_id: int,
    request: Request,
    service: Annotated[CatalogService, Depends(get_service)],
    payload: Any = Body(...),
) -> ProductResponse:
    """Partially update a product."""
    result = await service.update_product(product_id, payload)
    return ProductResponse.model_validate(unwrap(result, request))


@router.delete(
    "/{product_id}",
    response_model=SuccessResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
    description="Soft-delete a product; it stays fetchable by id.",
)
async def delete_product(
    product_id: int,
    request: Request,
    service: Annotated[CatalogService, Depends(get_service)],
) -> SuccessResponse:
    """Soft-delete a product."""
    unwrap(await service.delete_product(product_id), request)
    return SuccessResponse()
