"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from catalog_core.api.dependencies import get_service
from catalog_core.api.errors import unwrap
from catalog_core.api.schemas import CategoryResponse, CategoryWithCountResponse, ErrorResponse
from catalog_core.catalog.service import CatalogService

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get(
    "",
    response_model=list[CategoryWithCountResponse],
    summary="List categories",
    description="All categories with the number of products that are not soft-deleted.",
)
async def list_categories(
    request: Request,
    service: Annotated[CatalogService, Depends(get_service)],
) -> list[CategoryWithCountResponse]:
    """List categories."""
    result = await service.list_categories()
    return [CategoryWithCountResponse.model_validate(c) for c in unwrap(result, request)]


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get category",
)
async def get_category(
    category_id: int,
    request: Request,
    service: Annotated[CatalogService, Depends(get_service)],
) -> CategoryResponse:
    """Get a category by id."""
    result = await service.get_category(category_id)
    return CategoryResponse.model_validate(unwrap(result, request))
