"""Shared fixtures: an in-memory catalog database per test."""

from collections.abc import AsyncGenerator, Awaitable
from typing import Any, Callable

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from catalog_core.catalog.seed import seed_categories
from catalog_core.catalog.service import CatalogService
from catalog_core.infrastructure.database import Database


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory SQLite database with tables created."""
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def category_ids(database: Database) -> dict[str, int]:
    """Two persisted categories, keyed by name."""
    return await seed_categories(database, ["Apparel", "Footwear"])


@pytest.fixture
def service(database: Database) -> CatalogService:
    """Catalog service bound to the test database."""
    return CatalogService(database, request_id="test-request")


@pytest.fixture
def product_payload() -> Callable[..., dict[str, Any]]:
    """Factory for valid create payloads."""

    def make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": "Test Product",
            "description": "Created by the test suite",
            "status": "active",
            "variants": [
                {"sku": "TEST-001", "name": "Default", "price_cents": 1000, "inventory_count": 5},
            ],
        }
        payload.update(overrides)
        return payload

    return make


@pytest.fixture
def row_count(database: Database) -> Callable[[type], Awaitable[int]]:
    """Async counter of rows in a model's table, soft-deleted included."""

    async def count(model: type) -> int:
        async with database.session() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    return count
