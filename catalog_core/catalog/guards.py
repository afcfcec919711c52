"""Guard rules evaluated immediately before a mutating statement."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_core.catalog.models import Category, Variant
from catalog_core.domain.exceptions import InvalidInputError


async def ensure_category_exists(session: AsyncSession, category_id: int | None) -> None:
    """Refuse a write that references a missing category.

    A null reference means "uncategorised" and always passes.

    Raises:
        InvalidInputError: If ``category_id`` does not resolve.
    """
    if category_id is None:
        return
    result = await session.execute(select(Category.id).where(Category.id == category_id))
    if result.scalar_one_or_none() is None:
        raise InvalidInputError("Category not found", field="category_id")


async def count_variants(session: AsyncSession, product_id: int) -> int:
    """Number of variants a product currently owns."""
    result = await session.execute(
        select(func.count(Variant.id)).where(Variant.product_id == product_id)
    )
    return result.scalar_one()


async def ensure_not_last_variant(session: AsyncSession, variant: Variant) -> None:
    """Refuse to delete the only remaining variant of a product.

    Raises:
        InvalidInputError: If the product has one variant or fewer.
    """
    if await count_variants(session, variant.product_id) <= 1:
        raise InvalidInputError("Cannot delete the last variant of a product")
