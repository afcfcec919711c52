"""Catalog write operations.

Every public method runs as one transaction on the writer's session.
Guard rules and uniqueness checks execute inside that transaction but
strictly before the first mutating statement, so a refused write never
touches a row. Storage failures are translated into catalog errors: a
unique violation becomes ``ConflictError`` (the UNIQUE constraint is
authoritative even when the pre-check passed), anything else becomes
``InternalError``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_core.catalog.guards import ensure_category_exists, ensure_not_last_variant
from catalog_core.catalog.models import Product, Variant, fits_integer_column, utcnow
from catalog_core.catalog.reader import CatalogReader
from catalog_core.catalog.uniqueness import SkuUniquenessChecker
from catalog_core.catalog.validation import ProductChanges, ProductDraft, VariantChanges
from catalog_core.domain.exceptions import (
    CatalogError,
    ConflictError,
    InternalError,
    NotFoundError,
)

logger = structlog.get_logger()


def is_unique_violation(exc: IntegrityError) -> bool:
    """Whether an IntegrityError comes from a UNIQUE constraint.

    Matches SQLite ("UNIQUE constraint failed") and PostgreSQL
    ("duplicate key value violates unique constraint") diagnostics.
    """
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate key" in message


class CatalogWriter:
    """Write-side operations for products and variants.

    Example usage:
        async with database.session() as session:
            writer = CatalogWriter(session)
            product_id = await writer.create_product(draft)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize writer with database session.

        Args:
            session: Async SQLAlchemy session with no transaction in progress.
        """
        self.session = session
        self.reader = CatalogReader(session)
        self.skus = SkuUniquenessChecker(session)

    @asynccontextmanager
    async def unit_of_work(self, action: str) -> AsyncGenerator[None, None]:
        """Run a block as one transaction and translate storage errors.

        The transaction is rolled back on any exception.

        Args:
            action: Operation name for log context.

        Raises:
            CatalogError: Re-raised unchanged from the block.
            ConflictError: On a storage-level unique violation.
            InternalError: On any other storage failure.
        """
        try:
            async with self.session.begin():
                yield
        except CatalogError:
            raise
        except IntegrityError as e:
            if is_unique_violation(e):
                logger.warning("Unique constraint rejected write", action=action, error=str(e.orig))
                raise ConflictError(None) from e
            logger.error("Integrity error during write", action=action, error=str(e.orig))
            raise InternalError(str(e.orig)) from e
        except SQLAlchemyError as e:
            logger.error("Storage error during write", action=action, error=str(e))
            raise InternalError(str(e)) from e

    async def create_product(self, draft: ProductDraft) -> int:
        """Insert a product and all of its variants atomically.

        Args:
            draft: Validated create request.

        Returns:
            Id of the new product.

        Raises:
            InvalidInputError: Unknown category or duplicate SKU in request.
            ConflictError: A SKU already exists (pre-check or storage).
            InternalError: Any other storage failure.
        """
        async with self.unit_of_work("create_product"):
            await ensure_category_exists(self.session, draft.category_id)
            await self.skus.check_batch(draft.skus)

            product = Product(
                name=draft.name,
                description=draft.description,
                category_id=draft.category_id,
                status=draft.status,
            )
            self.session.add(product)
            await self.session.flush()

            for variant in draft.variants:
                self.session.add(
                    Variant(
                        product_id=product.id,
                        sku=variant.sku,
                        name=variant.name,
                        price_cents=variant.price_cents,
                        inventory_count=variant.inventory_count,
                    )
                )
                # flush per row so created_at/id order matches request order
                await self.session.flush()

            product_id = product.id

        logger.info(
            "product.created",
            product_id=product_id,
            variant_count=len(draft.variants),
        )
        return product_id

    async def update_product(self, product_id: int, changes: ProductChanges) -> None:
        """Merge supplied fields into a product and refresh ``updated_at``.

        Soft-deleted products are still updatable.

        Raises:
            NotFoundError: If no product has this id.
            InvalidInputError: If a supplied category does not exist.
        """
        values = changes.as_values()
        async with self.unit_of_work("update_product"):
            await self.reader.get_product_row(product_id)
            if "category_id" in values:
                await ensure_category_exists(self.session, values["category_id"])

            await self.session.execute(
                update(Product)
                .where(Product.id == product_id)
                .values(**values, updated_at=utcnow())
            )

        logger.info("product.updated", product_id=product_id, fields=sorted(values))

    async def soft_delete_product(self, product_id: int) -> None:
        """Mark a product deleted without removing the row.

        Raises:
            NotFoundError: If no product has this id.
        """
        if not fits_integer_column(product_id):
            raise NotFoundError("Product", product_id)
        async with self.unit_of_work("delete_product"):
            now = utcnow()
            result = await self.session.execute(
                update(Product)
                .where(Product.id == product_id)
                .values(deleted_at=now, updated_at=now)
            )
            if result.rowcount == 0:
                raise NotFoundError("Product", product_id)

        logger.info("product.soft_deleted", product_id=product_id)

    async def update_variant(self, variant_id: int, changes: VariantChanges) -> None:
        """Touch only the supplied variant columns and refresh ``updated_at``.

        Raises:
            NotFoundError: If no variant has this id.
            ConflictError: If a new SKU is already taken.
        """
        values = changes.as_values()
        async with self.unit_of_work("update_variant"):
            variant = await self.reader.get_variant_row(variant_id)
            if "sku" in values and values["sku"] != variant.sku:
                await self.skus.ensure_available([values["sku"]], exclude_variant_id=variant_id)

            await self.session.execute(
                update(Variant)
                .where(Variant.id == variant_id)
                .values(**values, updated_at=utcnow())
            )

        logger.info("variant.updated", variant_id=variant_id, fields=sorted(values))

    async def delete_variant(self, variant_id: int) -> None:
        """Physically remove a variant unless it is its product's last one.

        Raises:
            NotFoundError: If no variant has this id.
            InvalidInputError: If it is the last variant of its product.
        """
        async with self.unit_of_work("delete_variant"):
            variant = await self.reader.get_variant_row(variant_id)
            product_id = variant.product_id
            await ensure_not_last_variant(self.session, variant)
            await self.session.execute(delete(Variant).where(Variant.id == variant_id))

        logger.info("variant.deleted", variant_id=variant_id, product_id=product_id)
