"""Tests for SKU uniqueness checks."""

import pytest

from catalog_core.catalog.uniqueness import SkuUniquenessChecker, ensure_unique_in_batch
from catalog_core.domain.exceptions import ConflictError, InvalidInputError
from catalog_core.infrastructure.database import Database


class TestEnsureUniqueInBatch:
    """Tests for the in-request duplicate check."""

    def test_distinct_skus_pass(self) -> None:
        """Distinct SKUs are accepted."""
        ensure_unique_in_batch(["A-1", "A-2", "A-3"])

    def test_duplicate_reported_at_second_occurrence(self) -> None:
        """The index of the repeat is reported."""
        with pytest.raises(InvalidInputError) as exc_info:
            ensure_unique_in_batch(["A-1", "A-2", "A-1"])
        assert exc_info.value.message == 'Duplicate SKU "A-1" within request'
        assert exc_info.value.index == 2

    def test_duplicate_after_trim(self) -> None:
        """Whitespace does not make SKUs distinct."""
        with pytest.raises(InvalidInputError, match="Duplicate SKU"):
            ensure_unique_in_batch(["A-1", " A-1 "])

    def test_case_sensitive(self) -> None:
        """SKUs differing only in case are distinct."""
        ensure_unique_in_batch(["abc", "ABC"])


class TestSkuUniquenessChecker:
    """Tests for the storage-backed check."""

    @pytest.mark.asyncio
    async def test_free_sku(self, database: Database, service, product_payload) -> None:
        """Unused SKUs pass."""
        await service.create_product(product_payload())
        async with database.session() as session:
            checker = SkuUniquenessChecker(session)
            await checker.ensure_available(["OTHER-1"])
            assert await checker.find_variant_id("OTHER-1") is None

    @pytest.mark.asyncio
    async def test_taken_sku_conflicts(self, database: Database, service, product_payload) -> None:
        """A persisted SKU raises a conflict naming it."""
        await service.create_product(product_payload())
        async with database.session() as session:
            with pytest.raises(ConflictError) as exc_info:
                await SkuUniquenessChecker(session).ensure_available(["NEW-1", "TEST-001"])
        assert exc_info.value.sku == "TEST-001"
        assert exc_info.value.message == 'SKU "TEST-001" already exists'

    @pytest.mark.asyncio
    async def test_excluded_holder_passes(
        self, database: Database, service, product_payload
    ) -> None:
        """The variant being updated may keep its own SKU."""
        created = await service.create_product(product_payload())
        variant_id = created.value.variants[0].id
        async with database.session() as session:
            await SkuUniquenessChecker(session).ensure_available(
                ["TEST-001"], exclude_variant_id=variant_id
            )

    @pytest.mark.asyncio
    async def test_batch_check_runs_in_request_check_first(self, database: Database) -> None:
        """Duplicates within the batch are invalid input, not conflicts."""
        async with database.session() as session:
            with pytest.raises(InvalidInputError):
                await SkuUniquenessChecker(session).check_batch(["X", "X"])
