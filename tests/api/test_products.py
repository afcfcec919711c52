"""Tests for product API endpoints."""

from typing import Any

from fastapi.testclient import TestClient


class TestCreateProduct:
    """Tests for POST /api/products."""

    def test_create_product(self, client: TestClient, create_payload: dict[str, Any]) -> None:
        """A valid product is created with its variants."""
        response = client.post("/api/products", json=create_payload)
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "API Product"
        assert data["status"] == "active"
        assert data["deleted_at"] is None
        assert data["category_name"] is None
        assert [v["sku"] for v in data["variants"]] == ["API-001", "API-002"]
        assert data["variants"][0]["price_cents"] == 1200

    def test_create_with_category(
        self, seeded_client: TestClient, category_ids: dict[str, int], create_payload: dict[str, Any]
    ) -> None:
        """The category name is included in the response."""
        create_payload["category_id"] = category_ids["Footwear"]
        response = seeded_client.post("/api/products", json=create_payload)
        assert response.status_code == 201
        assert response.json()["category_name"] == "Footwear"

    def test_missing_name(self, client: TestClient, create_payload: dict[str, Any]) -> None:
        """A missing name is a 400 with the standard error body."""
        del create_payload["name"]
        response = client.post(
            "/api/products", json=create_payload, headers={"X-Request-ID": "req-missing-name"}
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "INVALID_INPUT"
        assert data["message"] == "Product name is required"
        assert data["details"] == {"field": "name"}
        assert data["request_id"] == "req-missing-name"

    def test_variant_error_reports_index(
        self, client: TestClient, create_payload: dict[str, Any]
    ) -> None:
        """Variant errors name the failing index."""
        create_payload["variants"][1]["inventory_count"] = -3
        response = client.post("/api/products", json=create_payload)
        assert response.status_code == 400
        assert response.json()["details"] == {"field": "inventory_count", "index": 1}

    def test_unknown_category(self, client: TestClient, create_payload: dict[str, Any]) -> None:
        """A dangling category is invalid input."""
        create_payload["category_id"] = 4040
        response = client.post("/api/products", json=create_payload)
        assert response.status_code == 400
        assert response.json()["message"] == "Category not found"

    def test_duplicate_sku_in_request(
        self, client: TestClient, create_payload: dict[str, Any]
    ) -> None:
        """Repeated SKUs in one body are rejected."""
        create_payload["variants"][1]["sku"] = "API-001"
        response = client.post("/api/products", json=create_payload)
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_INPUT"

    def test_existing_sku(self, client: TestClient, create_payload: dict[str, Any]) -> None:
        """A SKU already in the catalog is a 409."""
        assert client.post("/api/products", json=create_payload).status_code == 201

        create_payload["name"] = "Copy"
        response = client.post("/api/products", json=create_payload)
        assert response.status_code == 409
        data = response.json()
        assert data["error_code"] == "CONFLICT"
        assert data["details"] == {"sku": "API-001"}

        assert len(client.get("/api/products").json()) == 1

    def test_non_object_body(self, client: TestClient) -> None:
        """A JSON array body is invalid input."""
        response = client.post("/api/products", json=[{"name": "x"}])
        assert response.status_code == 400
        assert response.json()["message"] == "Request body must be an object"

    def test_malformed_json(self, client: TestClient) -> None:
        """An unparseable body is invalid input."""
        response = client.post(
            "/api/products",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_INPUT"


class TestReadProducts:
    """Tests for GET /api/products and GET /api/products/{id}."""

    def test_get_matches_create(self, client: TestClient, create_payload: dict[str, Any]) -> None:
        """Fetching returns what create returned."""
        created = client.post("/api/products", json=create_payload).json()
        response = client.get(f"/api/products/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    def test_get_missing(self, client: TestClient) -> None:
        """Unknown ids are a 404."""
        response = client.get("/api/products/99999")
        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "NOT_FOUND"
        assert data["message"] == "Product not found"

    def test_non_integer_id(self, client: TestClient) -> None:
        """A non-numeric id is invalid input."""
        response = client.get("/api/products/abc")
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_INPUT"

    def test_list_sample_catalog(self, seeded_client: TestClient) -> None:
        """Seeded products are listed with aggregates."""
        response = seeded_client.get("/api/products")
        assert response.status_code == 200
        products = {p["name"]: p for p in response.json()}
        tee = products["Classic Tee"]
        assert tee["variant_count"] == 3
        assert tee["min_price_cents"] == 1999
        assert tee["max_price_cents"] == 2199
        assert tee["total_inventory"] == 80
        assert tee["category_name"] == "Apparel"
        assert products["Gift Card"]["category_name"] is None

    def test_list_filters(
        self, seeded_client: TestClient, category_ids: dict[str, int]
    ) -> None:
        """search and category_id narrow the listing."""
        response = seeded_client.get("/api/products", params={"search": "trail"})
        assert [p["name"] for p in response.json()] == ["Trail Runner"]

        response = seeded_client.get(
            "/api/products", params={"category_id": category_ids["Accessories"]}
        )
        assert [p["name"] for p in response.json()] == ["Canvas Tote"]


class TestUpdateAndDeleteProduct:
    """Tests for PUT and DELETE /api/products/{id}."""

    def test_partial_update(self, client: TestClient, create_payload: dict[str, Any]) -> None:
        """Only supplied fields change."""
        created = client.post("/api/products", json=create_payload).json()
        response = client.put(f"/api/products/{created['id']}", json={"status": "archived"})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "archived"
        assert data["name"] == created["name"]
        assert data["description"] == created["description"]
        assert "variants" not in data

    def test_update_invalid_status(
        self, client: TestClient, create_payload: dict[str, Any]
    ) -> None:
        """Unknown statuses are rejected."""
        created = client.post("/api/products", json=create_payload).json()
        response = client.put(f"/api/products/{created['id']}", json={"status": "gone"})
        assert response.status_code == 400

    def test_update_missing(self, client: TestClient) -> None:
        """Unknown ids are a 404."""
        response = client.put("/api/products/777", json={"name": "Ghost"})
        assert response.status_code == 404

    def test_lifecycle(self, client: TestClient) -> None:
        """Create, update, soft-delete, then read back."""
        created = client.post(
            "/api/products",
            json={
                "name": "Lifecycle Product",
                "variants": [
                    {"sku": "LIFE-001", "name": "Only", "price_cents": 500, "inventory_count": 3}
                ],
            },
        )
        assert created.status_code == 201
        product_id = created.json()["id"]

        updated = client.put(f"/api/products/{product_id}", json={"name": "Updated Lifecycle"})
        assert updated.json()["name"] == "Updated Lifecycle"

        deleted = client.delete(f"/api/products/{product_id}")
        assert deleted.status_code == 200
        assert deleted.json() == {"success": True}

        fetched = client.get(f"/api/products/{product_id}")
        assert fetched.status_code == 200
        assert fetched.json()["deleted_at"] is not None
        assert len(fetched.json()["variants"]) == 1

        listed = client.get("/api/products").json()
        assert product_id not in [p["id"] for p in listed]

    def test_delete_missing(self, client: TestClient) -> None:
        """Unknown ids are a 404."""
        response = client.delete("/api/products/123456")
        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_null_clears_or_is_rejected(
        self, client: TestClient, create_payload: dict[str, Any]
    ) -> None:
        """Null clears a nullable field and is refused for a required one."""
        created = client.post("/api/products", json=create_payload).json()

        response = client.put(f"/api/products/{created['id']}", json={"name": None})
        assert response.status_code == 400
        assert response.json()["details"] == {"field": "name"}

        response = client.put(f"/api/products/{created['id']}", json={"description": None})
        assert response.status_code == 200
        assert response.json()["description"] is None
        assert response.json()["name"] == "API Product"
