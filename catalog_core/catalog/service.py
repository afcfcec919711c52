"""Catalog service.

Entry point for the transport layer. Each operation validates the raw
request, runs the read or write pipeline on a fresh session and returns
a ``CatalogResult``; catalog errors never propagate past this class.
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_core.catalog.dtos import CategoryDTO, ProductDTO, ProductSummaryDTO, VariantDTO
from catalog_core.catalog.reader import CatalogReader, ProductFilter
from catalog_core.catalog.validation import (
    validate_new_product,
    validate_product_changes,
    validate_variant_changes,
)
from catalog_core.catalog.writer import CatalogWriter
from catalog_core.domain.exceptions import CatalogError, InternalError
from catalog_core.domain.results import CatalogResult
from catalog_core.infrastructure.database import Database

T = TypeVar("T")

logger = structlog.get_logger()


class CatalogService:
    """Service for catalog operations.

    Example usage:
        service = CatalogService(database)
        result = await service.create_product({
            "name": "Tee",
            "variants": [{"sku": "TEE-S", "name": "Small", "price_cents": 1500}],
        })
        if result.success:
            print(result.value.id)
    """

    def __init__(self, database: Database, request_id: str | None = None) -> None:
        """Initialize service.

        Args:
            database: Storage handle.
            request_id: Request ID for correlation.
        """
        self.database = database
        self.request_id = request_id

    async def _run(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[T]],
    ) -> CatalogResult[T]:
        """Run ``work`` on a fresh session and wrap its outcome."""
        try:
            async with self.database.session() as session:
                return CatalogResult.ok(await work(session))
        except InternalError as e:
            logger.error(
                "Catalog operation failed",
                operation=operation,
                error=e.detail,
                request_id=self.request_id,
            )
            return CatalogResult.fail(e)
        except CatalogError as e:
            logger.warning(
                "Catalog operation rejected",
                operation=operation,
                error_code=e.error_code,
                error=e.message,
                request_id=self.request_id,
            )
            return CatalogResult.fail(e)
        except SQLAlchemyError as e:
            logger.error(
                "Storage error",
                operation=operation,
                error=str(e),
                request_id=self.request_id,
            )
            return CatalogResult.fail(InternalError(str(e)))

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def create_product(self, payload: Any) -> CatalogResult[ProductDTO]:
        """Create a product together with its initial variants.

        Args:
            payload: Decoded request body.

        Returns:
            Created product with category name and variants in request
            order, or InvalidInput / Conflict / Internal failure.
        """

        async def work(session: AsyncSession) -> ProductDTO:
            draft = validate_new_product(payload)
            product_id = await CatalogWriter(session).create_product(draft)
            return await CatalogReader(session).get_product(product_id)

        return await self._run("create_product", work)

    async def get_product(self, product_id: int) -> CatalogResult[ProductDTO]:
        """Get a product with its variants, soft-deleted or not."""

        async def work(session: AsyncSession) -> ProductDTO:
            return await CatalogReader(session).get_product(product_id)

        return await self._run("get_product", work)

    async def list_products(
        self,
        filters: ProductFilter | None = None,
    ) -> CatalogResult[list[ProductSummaryDTO]]:
        """List live products with variant aggregates."""

        async def work(session: AsyncSession) -> list[ProductSummaryDTO]:
            return await CatalogReader(session).list_products(filters)

        return await self._run("list_products", work)

    async def update_product(self, product_id: int, payload: Any) -> CatalogResult[ProductDTO]:
        """Merge supplied fields into a product.

        Returns:
            Updated product (without variants).
        """

        async def work(session: AsyncSession) -> ProductDTO:
            changes = validate_product_changes(payload)
            await CatalogWriter(session).update_product(product_id, changes)
            return await CatalogReader(session).get_product(product_id, include_variants=False)

        return await self._run("update_product", work)

    async def delete_product(self, product_id: int) -> CatalogResult[bool]:
        """Soft-delete a product."""

        async def work(session: AsyncSession) -> bool:
            await CatalogWriter(session).soft_delete_product(product_id)
            return True

        return await self._run("delete_product", work)

    # ------------------------------------------------------------------
    # Variants
    # ------------------------------------------------------------------

    async def get_variant(self, variant_id: int) -> CatalogResult[VariantDTO]:
        """Get a variant by id."""

        async def work(session: AsyncSession) -> VariantDTO:
            return await CatalogReader(session).get_variant(variant_id)

        return await self._run("get_variant", work)

    async def update_variant(self, variant_id: int, payload: Any) -> CatalogResult[VariantDTO]:
        """Update only the supplied variant fields."""

        async def work(session: AsyncSession) -> VariantDTO:
            changes = validate_variant_changes(payload)
            await CatalogWriter(session).update_variant(variant_id, changes)
            return await CatalogReader(session).get_variant(variant_id)

        return await self._run("update_variant", work)

    async def delete_variant(self, variant_id: int) -> CatalogResult[bool]:
        """Delete a variant unless it is its product's last one."""

        async def work(session: AsyncSession) -> bool:
            await CatalogWriter(session).delete_variant(variant_id)
            return True

        return await self._run("delete_variant", work)

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    async def list_categories(self) -> CatalogResult[list[CategoryDTO]]:
        """Categories with live product counts."""

        async def work(session: AsyncSession) -> list[CategoryDTO]:
            return await CatalogReader(session).list_categories()

        return await self._run("list_categories", work)

    async def get_category(self, category_id: int) -> CatalogResult[CategoryDTO]:
        """Get a category by id."""

        async def work(session: AsyncSession) -> CategoryDTO:
            return await CatalogReader(session).get_category(category_id)

        return await self._run("get_category", work)


# ============================================================================
# Service Factory
# ============================================================================


def get_catalog_service(database: Database, request_id: str | None = None) -> CatalogService:
    """Get catalog service instance.

    Args:
        database: Storage handle.
        request_id: Request ID for correlation.

    Returns:
        CatalogService instance.
    """
    return CatalogService(database, request_id=request_id)
