"""SKU uniqueness checks.

Two scopes are checked before any write: duplicates inside one request
(cheap, no I/O) and collisions with persisted variants. The storage
UNIQUE constraint on ``variants.sku`` stays the final authority; these
checks only produce a clearer error earlier.
"""

from collections.abc import Iterable

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_core.catalog.models import Variant
from catalog_core.domain.exceptions import ConflictError, InvalidInputError

logger = structlog.get_logger()


def ensure_unique_in_batch(skus: Iterable[str]) -> None:
    """Reject a request that repeats a SKU.

    Comparison is exact (case-sensitive) after trimming.

    Args:
        skus: Candidate SKUs in request order.

    Raises:
        InvalidInputError: On the first repeated SKU.
    """
    seen: set[str] = set()
    for index, sku in enumerate(skus):
        normalized = sku.strip()
        if normalized in seen:
            raise InvalidInputError(
                f'Duplicate SKU "{normalized}" within request',
                field="sku",
                index=index,
            )
        seen.add(normalized)


class SkuUniquenessChecker:
    """Checks candidate SKUs against persisted variants."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize checker with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def find_variant_id(self, sku: str) -> int | None:
        """Id of the variant holding ``sku``, if any."""
        result = await self.session.execute(select(Variant.id).where(Variant.sku == sku))
        return result.scalars().first()

    async def ensure_available(
        self,
        skus: Iterable[str],
        exclude_variant_id: int | None = None,
    ) -> None:
        """Reject SKUs that already belong to a persisted variant.

        Args:
            skus: Candidate SKUs, checked in order.
            exclude_variant_id: Variant allowed to hold the SKU (the one
                being updated).

        Raises:
            ConflictError: On the first SKU already taken.
        """
        for sku in skus:
            normalized = sku.strip()
            holder = await self.find_variant_id(normalized)
            if holder is not None and holder != exclude_variant_id:
                logger.warning("SKU already taken", sku=normalized, variant_id=holder)
                raise ConflictError(normalized)

    async def check_batch(self, skus: list[str]) -> None:
        """Run the in-request check, then the storage check."""
        ensure_unique_in_batch(skus)
        await self.ensure_available(skus)
