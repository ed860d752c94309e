# =============================================================================
# tests/test_products_api.py - Product Endpoint Tests
# =============================================================================
# HTTP-level tests for /api/products:
# - Validation errors (status, count and exact messages)
# - Not-found handling
# - Successful CRUD round trips
# =============================================================================

import pytest


NAME_REQUIRED = "El nombre del producto es obligatorio"
PRICE_REQUIRED = "El precio del producto es obligatorio"
PRICE_INVALID = "El precio del producto no es válido"
PRICE_NOT_NUMERIC = "Valor no válido"
ID_INVALID = "El ID del producto no es válido"
AVAILABILITY_INVALID = "El estado de disponibilidad debe ser un valor booleano"
NOT_FOUND = "Producto no encontrado"


def _messages(response) -> list[str]:
    return [error["msg"] for error in response.json()["errors"]]


# =============================================================================
# POST /api/products
# =============================================================================

class TestCreateProduct:
    """Tests for POST /api/products."""

    def test_empty_body_returns_all_errors(self, client):
        """An empty body fails name once and price three times."""
        response = client.post("/api/products", json={})

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/json")
        assert len(response.json()["errors"]) == 4
        assert _messages(response) == [
            NAME_REQUIRED,
            PRICE_NOT_NUMERIC,
            PRICE_REQUIRED,
            PRICE_INVALID,
        ]

    def test_missing_fields_omit_value(self, client):
        """Absent fields have no value key in their error entries."""
        response = client.post("/api/products", json={})

        first = response.json()["errors"][0]
        assert first == {
            "type": "field",
            "msg": NAME_REQUIRED,
            "path": "name",
            "location": "body",
        }

    def test_zero_price_is_rejected(self, client):
        """Price must be strictly greater than zero."""
        response = client.post("/api/products", json={"name": "Test Product", "price": 0})

        assert response.status_code == 400
        assert _messages(response) == [PRICE_INVALID]
        assert response.json()["errors"][0]["value"] == 0

    @pytest.mark.parametrize("price", [-1, -0.01, "-5", "0"])
    def test_non_positive_prices_fail_once(self, client, price):
        """Every non-positive numeric price produces exactly one error."""
        response = client.post("/api/products", json={"name": "Test Product", "price": price})

        assert response.status_code == 400
        assert _messages(response) == [PRICE_INVALID]

    def test_non_numeric_price_fails_twice(self, client):
        """A text price fails the numeric check and the positive check."""
        response = client.post("/api/products", json={"name": "Test Product", "price": "Test"})

        assert response.status_code == 400
        assert _messages(response) == [PRICE_NOT_NUMERIC, PRICE_INVALID]

    def test_empty_name_is_rejected(self, client):
        response = client.post("/api/products", json={"name": "", "price": 10})

        assert response.status_code == 400
        assert _messages(response) == [NAME_REQUIRED]

    def test_creates_product(self, client, sample_product_payload):
        """A valid product is created and returned with its new id."""
        response = client.post("/api/products", json=sample_product_payload)

        assert response.status_code == 201
        assert "errors" not in response.json()

        data = response.json()["data"]
        assert isinstance(data["id"], int)
        assert data["name"] == "Test Product"
        assert data["price"] == 100
        assert data["isAvailable"] is True
        assert "createdAt" in data
        assert "updatedAt" in data

    def test_numeric_string_price_is_stored_as_number(self, client):
        response = client.post("/api/products", json={"name": "Mouse", "price": "25.5"})

        assert response.status_code == 201
        assert response.json()["data"]["price"] == 25.5

    def test_is_available_is_not_settable_on_create(self, client):
        response = client.post(
            "/api/products",
            json={"name": "Monitor", "price": 300, "isAvailable": False},
        )

        assert response.status_code == 201
        assert response.json()["data"]["isAvailable"] is True

    def test_created_product_can_be_fetched(self, client, sample_product_payload):
        """Round trip: create then fetch returns the same name and price."""
        created = client.post("/api/products", json=sample_product_payload).json()["data"]

        response = client.get(f"/api/products/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"]["name"] == sample_product_payload["name"]
        assert response.json()["data"]["price"] == sample_product_payload["price"]

    def test_non_json_body_counts_as_empty(self, client):
        response = client.post(
            "/api/products",
            content="name=Test",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

        assert response.status_code == 400
        assert len(response.json()["errors"]) == 4

    def test_malformed_json_is_rejected(self, client):
        response = client.post(
            "/api/products",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()

    def test_integer_past_digit_limit_is_rejected(self, client):
        """A price integer too long to convert reads as Infinity, not a crash."""
        response = client.post(
            "/api/products",
            content='{"name": "X", "price": 1' + "0" * 5000 + "}",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert PRICE_NOT_NUMERIC in _messages(response)
        price_errors = [e for e in response.json()["errors"] if e["path"] == "price"]
        assert all(e["value"] is None for e in price_errors)

    def test_nan_literal_is_malformed_json(self, client):
        response = client.post(
            "/api/products",
            content='{"name": "X", "price": NaN}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()

    def test_small_decimal_price_is_accepted(self, client):
        """Prices down to 1e-6 print positionally and pass isNumeric."""
        response = client.post("/api/products", json={"name": "Bolt", "price": 0.00001})

        assert response.status_code == 201
        assert response.json()["data"]["price"] == 0.00001

    def test_infinite_price_is_rejected(self, client):
        """A numeric string too large for a float is not a valid price."""
        response = client.post("/api/products", json={"name": "X", "price": "9" * 400})

        assert response.status_code == 400
        assert _messages(response) == [PRICE_INVALID]


# =============================================================================
# GET /api/products
# =============================================================================

class TestListProducts:
    """Tests for GET /api/products."""

    def test_empty_catalog(self, client):
        response = client.get("/api/products")

        assert response.status_code == 200
        assert response.json() == {"data": []}

    def test_lists_newest_first(self, client, create_product):
        first = create_product(name="First", price=1)
        second = create_product(name="Second", price=2)

        response = client.get("/api/products")

        assert response.status_code == 200
        ids = [p["id"] for p in response.json()["data"]]
        assert ids == [second, first]

    def test_timestamps_are_excluded(self, client, product_id):
        response = client.get("/api/products")

        item = response.json()["data"][0]
        assert set(item) == {"id", "name", "price", "isAvailable"}


# =============================================================================
# GET /api/products/{id}
# =============================================================================

class TestGetProduct:
    """Tests for GET /api/products/{id}."""

    def test_not_found(self, client):
        response = client.get("/api/products/9999")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {"error": NOT_FOUND}

    def test_invalid_id(self, client):
        response = client.get("/api/products/invalid-id")

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert len(errors) == 1
        assert errors[0]["msg"] == ID_INVALID
        assert errors[0]["path"] == "id"
        assert errors[0]["location"] == "params"
        assert errors[0]["value"] == "invalid-id"

    def test_out_of_range_id_is_not_found(self, client):
        """An integer id past the key column's range is a 404, not a 500."""
        response = client.get("/api/products/" + "9" * 30)

        assert response.status_code == 404
        assert response.json() == {"error": NOT_FOUND}

    def test_overlong_id_is_not_found(self, client):
        response = client.get("/api/products/" + "9" * 5000)

        assert response.status_code == 404
        assert response.json() == {"error": NOT_FOUND}

    def test_returns_product(self, client, product_id):
        response = client.get(f"/api/products/{product_id}")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == product_id
        assert response.json()["data"]["name"] == "Laptop"

    def test_repeated_reads_are_identical(self, client, product_id):
        first = client.get(f"/api/products/{product_id}").json()
        second = client.get(f"/api/products/{product_id}").json()

        assert first == second


# =============================================================================
# PUT /api/products/{id}
# =============================================================================

class TestUpdateProduct:
    """Tests for PUT /api/products/{id}."""

    def test_invalid_id_is_reported_first(self, client):
        """Missing isAvailable adds a second error after the id error."""
        response = client.put(
            "/api/products/invalid-id",
            json={"name": "Updated Product", "price": 150},
        )

        assert response.status_code == 400
        assert _messages(response) == [ID_INVALID, AVAILABILITY_INVALID]

    def test_not_found(self, client, sample_update_payload):
        response = client.put("/api/products/9999", json=sample_update_payload)

        assert response.status_code == 404
        assert response.json()["error"] == NOT_FOUND

    def test_empty_body(self, client, product_id):
        response = client.put(f"/api/products/{product_id}", json={})

        assert response.status_code == 400
        assert len(response.json()["errors"]) == 5
        assert "data" not in response.json()

    def test_negative_price(self, client, product_id):
        response = client.put(
            f"/api/products/{product_id}",
            json={"name": "Updated Product", "price": -150, "isAvailable": True},
        )

        assert response.status_code == 400
        assert _messages(response) == [PRICE_INVALID]

    def test_non_boolean_availability(self, client, product_id):
        response = client.put(
            f"/api/products/{product_id}",
            json={"name": "Updated Product", "price": 150, "isAvailable": "yes"},
        )

        assert response.status_code == 400
        assert _messages(response) == [AVAILABILITY_INVALID]

    def test_updates_product(self, client, product_id, sample_update_payload):
        response = client.put(f"/api/products/{product_id}", json=sample_update_payload)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == product_id
        assert data["name"] == "Updated Product"
        assert data["price"] == 150
        assert data["isAvailable"] is True

    def test_replaces_availability(self, client, product_id):
        response = client.put(
            f"/api/products/{product_id}",
            json={"name": "Laptop", "price": 999.99, "isAvailable": False},
        )

        assert response.status_code == 200
        assert response.json()["data"]["isAvailable"] is False
        fetched = client.get(f"/api/products/{product_id}").json()["data"]
        assert fetched["isAvailable"] is False

    def test_id_in_body_is_ignored(self, client, product_id, sample_update_payload):
        response = client.put(
            f"/api/products/{product_id}",
            json={**sample_update_payload, "id": product_id + 100},
        )

        assert response.status_code == 200
        assert response.json()["data"]["id"] == product_id


# =============================================================================
# PATCH /api/products/{id}
# =============================================================================

class TestUpdateAvailability:
    """Tests for PATCH /api/products/{id}."""

    def test_not_found(self, client):
        response = client.patch("/api/products/9999")

        assert response.status_code == 404
        assert response.json() == {"error": NOT_FOUND}

    def test_invalid_id(self, client):
        response = client.patch("/api/products/abc")

        assert response.status_code == 400
        assert _messages(response) == [ID_INVALID]

    def test_toggles_availability(self, client, product_id):
        response = client.patch(f"/api/products/{product_id}")

        assert response.status_code == 200
        assert response.json()["data"]["isAvailable"] is False

    def test_two_toggles_restore_original(self, client, product_id):
        original = client.get(f"/api/products/{product_id}").json()["data"]["isAvailable"]

        client.patch(f"/api/products/{product_id}")
        response = client.patch(f"/api/products/{product_id}")

        assert response.json()["data"]["isAvailable"] == original


# =============================================================================
# DELETE /api/products/{id}
# =============================================================================

class TestDeleteProduct:
    """Tests for DELETE /api/products/{id}."""

    def test_invalid_id(self, client):
        response = client.delete("/api/products/invalid-id")

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/json")
        assert _messages(response) == [ID_INVALID]

    def test_not_found(self, client):
        response = client.delete("/api/products/9999")

        assert response.status_code == 404
        assert response.json()["error"] == NOT_FOUND

    def test_deletes_product(self, client, product_id):
        response = client.delete(f"/api/products/{product_id}")

        assert response.status_code == 200
        assert response.json() == {"data": "Producto eliminado exitosamente"}

    def test_deleted_product_is_gone(self, client, product_id):
        client.delete(f"/api/products/{product_id}")

        response = client.get(f"/api/products/{product_id}")

        assert response.status_code == 404


@pytest.mark.parametrize("method", ["get", "put", "patch", "delete"])
def test_invalid_id_message_is_the_same_for_every_method(client, method):
    """A non-integer id always yields the id message first."""
    response = client.request(method.upper(), "/api/products/1.5")

    assert response.status_code == 400
    assert _messages(response)[0] == ID_INVALID
