"""Tests for variant API endpoints."""

from typing import Any

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def product(client: TestClient, create_payload: dict[str, Any]) -> dict[str, Any]:
    """A product with two variants."""
    response = client.post("/api/products", json=create_payload)
    assert response.status_code == 201
    return response.json()


class TestGetVariant:
    """Tests for GET /api/variants/{id}."""

    def test_get_variant(self, client: TestClient, product: dict[str, Any]) -> None:
        """A variant is fetchable by id."""
        variant = product["variants"][0]
        response = client.get(f"/api/variants/{variant['id']}")
        assert response.status_code == 200
        assert response.json() == variant

    def test_get_missing(self, client: TestClient) -> None:
        """Unknown ids are a 404."""
        response = client.get("/api/variants/4242")
        assert response.status_code == 404
        assert response.json()["message"] == "Variant not found"


class TestUpdateVariant:
    """Tests for PUT /api/variants/{id}."""

    def test_update_price_keeps_inventory(
        self, client: TestClient, product: dict[str, Any]
    ) -> None:
        """Only the supplied field changes."""
        variant = product["variants"][0]
        response = client.put(f"/api/variants/{variant['id']}", json={"price_cents": 999})
        assert response.status_code == 200
        data = response.json()
        assert data["price_cents"] == 999
        assert data["inventory_count"] == variant["inventory_count"]

    def test_update_own_sku(self, client: TestClient, product: dict[str, Any]) -> None:
        """Keeping the current SKU is not a conflict."""
        variant = product["variants"][0]
        response = client.put(f"/api/variants/{variant['id']}", json={"sku": variant["sku"]})
        assert response.status_code == 200

    def test_update_to_taken_sku(self, client: TestClient, product: dict[str, Any]) -> None:
        """Another variant's SKU is a 409."""
        first, second = product["variants"]
        response = client.put(f"/api/variants/{second['id']}", json={"sku": first["sku"]})
        assert response.status_code == 409
        assert response.json()["error_code"] == "CONFLICT"

    def test_update_without_fields(self, client: TestClient, product: dict[str, Any]) -> None:
        """An empty body is invalid input."""
        variant = product["variants"][0]
        response = client.put(f"/api/variants/{variant['id']}", json={})
        assert response.status_code == 400
        assert response.json()["message"] == "No fields provided to update"

    def test_update_negative_inventory(
        self, client: TestClient, product: dict[str, Any]
    ) -> None:
        """Negative numbers are rejected."""
        variant = product["variants"][0]
        response = client.put(f"/api/variants/{variant['id']}", json={"inventory_count": -1})
        assert response.status_code == 400
        assert response.json()["details"] == {"field": "inventory_count"}

    def test_update_missing(self, client: TestClient) -> None:
        """Unknown ids are a 404."""
        response = client.put("/api/variants/4242", json={"name": "Ghost"})
        assert response.status_code == 404


class TestDeleteVariant:
    """Tests for DELETE /api/variants/{id}."""

    def test_delete_then_last_variant_guard(
        self, client: TestClient, product: dict[str, Any]
    ) -> None:
        """The first delete succeeds, the last variant stays."""
        first, second = product["variants"]

        response = client.delete(f"/api/variants/{first['id']}")
        assert response.status_code == 200
        assert response.json() == {"success": True}

        response = client.delete(f"/api/variants/{second['id']}")
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot delete the last variant of a product"

        remaining = client.get(f"/api/products/{product['id']}").json()["variants"]
        assert [v["id"] for v in remaining] == [second["id"]]

    def test_delete_missing(self, client: TestClient) -> None:
        """Unknown ids are a 404."""
        response = client.delete("/api/variants/4242")
        assert response.status_code == 404
