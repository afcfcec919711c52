"""Shared fixtures for API tests."""

from collections.abc import Callable, Generator
from contextlib import ExitStack
from typing import Any

import pytest
from fastapi.testclient import TestClient

from catalog_core.infrastructure.config import Settings
from catalog_core.main import create_app


def make_settings(**overrides: Any) -> Settings:
    """Settings for an isolated in-memory database."""
    values: dict[str, Any] = {
        "database_url": "sqlite+aiosqlite:///:memory:",
        "create_tables": True,
        "seed_sample_data": False,
        "log_json": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def make_client() -> Generator[Callable[..., TestClient], None, None]:
    """Factory for started test clients; settings overrides as kwargs."""
    with ExitStack() as stack:

        def make(**overrides: Any) -> TestClient:
            app = create_app(make_settings(**overrides))
            return stack.enter_context(TestClient(app))

        yield make


@pytest.fixture
def client(make_client: Callable[..., TestClient]) -> TestClient:
    """Test client over an empty catalog."""
    return make_client()


@pytest.fixture
def seeded_client(make_client: Callable[..., TestClient]) -> TestClient:
    """Test client over the sample catalog."""
    return make_client(seed_sample_data=True)


@pytest.fixture
def category_ids(seeded_client: TestClient) -> dict[str, int]:
    """Sample category ids keyed by name."""
    response = seeded_client.get("/api/categories")
    return {c["name"]: c["id"] for c in response.json()}


@pytest.fixture
def create_payload() -> dict[str, Any]:
    """Valid product create body."""
    return {
        "name": "API Product",
        "description": "Created over HTTP",
        "variants": [
            {"sku": "API-001", "name": "Small", "price_cents": 1200, "inventory_count": 4},
            {"sku": "API-002", "name": "Large", "price_cents": 1500, "inventory_count": 2},
        ],
    }
