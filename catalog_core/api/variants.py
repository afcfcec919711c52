"""Variant API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request

from catalog_core.api.dependencies import get_service
from catalog_core.api.errors import unwrap
from catalog_core.api.schemas import ErrorResponse, SuccessResponse, VariantResponse
from catalog_core.catalog.service import CatalogService

router = APIRouter(prefix="/api/variants", tags=["Variants"])


@router.get(
    "/{variant_id}",
    response_model=VariantResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get variant",
)
async def get_variant(
    variant_id: int,
    request: Request,
    service: Annotated[CatalogService, Depends(get_service)],
) -> VariantResponse:
    """Get a variant by id."""
    result = await service.get_variant(variant_id)
    return VariantResponse.model_validate(unwrap(result, request))


@router.put(
    "/{variant_id}",
    response_model=VariantResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update variant",
    description="Update only the supplied fields among sku, name, "
    "price_cents and inventory_count.",
)
async def update_variant(
    variant_id: int,
    request: Request,
    service: Annotated[CatalogService, Depends(get_service)],
    payload: Any = Body(...),
) -> VariantResponse:
    """Partially update a variant."""
    result = await service.update_variant(variant_id, payload)
    return VariantResponse.model_validate(unwrap(result, request))


@router.delete(
    "/{variant_id}",
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete variant",
    description="Delete a variant. The last variant of a product cannot be deleted.",
)
async def delete_variant(
    variant_id: int,
    request: Request,
    service: Annotated[CatalogService, Depends(get_service)],
) -> SuccessResponse:
    """Delete a variant."""
    unwrap(await service.delete_variant(variant_id), request)
    return SuccessResponse()
