"""
Tests for the order endpoints.
"""
import pytest


@pytest.fixture
def order_payload(product):
    return {
        "products": [
            {"product_id": product["id"], "product_name": product["name"], "size": "S", "quantity": 2, "price": 30},
            {"product_id": product["id"], "product_name": product["name"], "size": "M", "quantity": 1, "price": 30},
        ],
        "date": "2024-05-01T12:00:00Z",
        "payment_method": "Zelle",
        "supplier": "Wholesale Co",
        "total_order_amount": 100,
    }


class TestOrdersAPI:
    """Test cases for /orders."""

    def test_create_and_get_order(self, client, order_payload):
        response = client.post("/api/v1/orders", json=order_payload)

        assert response.status_code == 201
        order = response.json()
        assert order["order_number"] == 1
        assert order["status"] == "SHIPPING"
        assert order["total_item_count"] == 3
        assert order["product_cost"] == 90
        assert order["fees_and_shipping"] == 10

        fetched = client.get(f"/api/v1/orders/{order['id']}").json()
        assert fetched["id"] == order["id"]
        assert [item["id"] for item in client.get("/api/v1/orders").json()] == [order["id"]]

    def test_create_requires_fields(self, client, order_payload):
        response = client.post("/api/v1/orders", json={**order_payload, "products": []})
        assert response.status_code == 400

        response = client.post("/api/v1/orders", json={**order_payload, "payment_method": None})
        assert response.status_code == 400
        assert response.json()["detail"] == "Payment method is required"

    def test_unknown_price_is_stored_as_null(self, client, order_payload):
        order_payload["products"][1]["price"] = -1
        order = client.post("/api/v1/orders", json=order_payload).json()

        assert order["products"][1]["price"] is None
        assert order["product_cost"] is None
        assert order["fees_and_shipping"] is None

    def test_partial_arrival_rolls_up_per_product(self, client, order_payload):
        order = client.post("/api/v1/orders", json=order_payload).json()

        order_payload["products"][0]["arrived_quantity"] = 2
        response = client.put(f"/api/v1/orders/{order['id']}", json=order_payload)

        assert response.status_code == 200
        updated = response.json()
        assert updated["status"] == "PARTIALLY ARRIVED"
        assert {item["status"] for item in updated["products"]} == {"PARTIALLY ARRIVED"}

        order_payload["products"][1]["arrived_quantity"] = 5
        completed = client.put(f"/api/v1/orders/{order['id']}", json=order_payload).json()
        assert completed["status"] == "COMPLETED"
        assert completed["products"][1]["arrived_quantity"] == 1

        logs = client.get("/api/v1/logs", params={"category": "orders"}).json()
        assert len(logs) == 2

    def test_missing_order(self, client, order_payload):
        assert client.get("/api/v1/orders/missing").status_code == 404
        assert client.put("/api/v1/orders/missing", json=order_payload).status_code == 404
        assert client.delete("/api/v1/orders/missing").status_code == 404

    def test_delete_order(self, client, order_payload):
        order = client.post("/api/v1/orders", json=order_payload).json()
        assert client.delete(f"/api/v1/orders/{order['id']}").status_code == 200
        assert client.get("/api/v1/orders").json() == []

    def test_malformed_body_is_400(self, client, order_payload):
        response = client.post("/api/v1/orders", json={**order_payload, "date": "not a date"})
        assert response.status_code == 400
        assert "date" in response.json()["detail"]

    def test_fractional_quantity_is_400(self, client, order_payload):
        order_payload["products"][0]["quantity"] = 2.7
        response = client.post("/api/v1/orders", json=order_payload)

        assert response.status_code == 400
        assert "quantity" in response.json()["detail"]
        assert client.get("/api/v1/orders").json() == []
