"""
Tests for the product and inventory endpoints.
"""


class TestProductsAPI:
    """Test cases for /products."""

    def test_create_product_defaults_type_to_name(self, client, product):
        assert product["type"] == "Essentials Hoodie"
        assert product["in_inventory"] is False
        assert product["size_quantities"] == {"S": 2, "M": 1}

    def test_create_requires_name_and_image(self, client):
        response = client.post("/api/v1/products", json={"name": "No Image"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Name and image are required"

    def test_duplicate_name_conflicts(self, client, product):
        response = client.post("/api/v1/products", json={"name": product["name"], "image": "other.jpg"})
        assert response.status_code == 409

    def test_list_products(self, client, product):
        response = client.get("/api/v1/products")
        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [product["id"]]

    def test_update_keeps_unsent_fields(self, client, product):
        response = client.put(f"/api/v1/products/{product['id']}", json={
            "name": "Essentials Hoodie v2",
            "image": product["image"],
            "sizes": ["M"],
        })

        assert response.status_code == 200
        updated = response.json()
        assert updated["name"] == "Essentials Hoodie v2"
        assert updated["brand"] == "Fear of God"
        assert updated["sizes"] == ["M"]

    def test_update_name_conflict_and_missing(self, client, product):
        client.post("/api/v1/products", json={"name": "Other", "image": "o.jpg"})

        response = client.put(f"/api/v1/products/{product['id']}", json={"name": "Other", "image": "x.jpg"})
        assert response.status_code == 409

        response = client.put("/api/v1/products/missing", json={"name": "New", "image": "x.jpg"})
        assert response.status_code == 404

    def test_patch_product(self, client, product):
        response = client.patch(f"/api/v1/products/{product['id']}", json={"size_quantities": {"S": -1, "L": 3}})
        assert response.status_code == 200
        assert response.json()["size_quantities"] == {"S": 0, "L": 3}

        response = client.patch(f"/api/v1/products/{product['id']}", json={})
        assert response.status_code == 400

        response = client.patch("/api/v1/products/missing", json={"in_inventory": True})
        assert response.status_code == 404

    def test_delete_product(self, client, product):
        assert client.delete(f"/api/v1/products/{product['id']}").status_code == 200
        assert client.delete(f"/api/v1/products/{product['id']}").status_code == 404


class TestInventoryAPI:
    """Test cases for /inventory."""

    def test_add_and_list(self, client, product):
        response = client.post("/api/v1/inventory", json={"product_id": product["id"]})
        assert response.status_code == 201
        assert response.json()["size_quantities"] == {"S": 2, "M": 1, "L": 0}

        inventory = client.get("/api/v1/inventory").json()
        assert len(inventory) == 1
        assert inventory[0]["product"]["name"] == "Essentials Hoodie"

        assert client.get(f"/api/v1/products/{product['id']}").json()["in_inventory"] is True

    def test_add_errors(self, client, product):
        assert client.post("/api/v1/inventory", json={}).status_code == 400
        assert client.post("/api/v1/inventory", json={"product_id": "missing"}).status_code == 404

        client.post("/api/v1/inventory", json={"product_id": product["id"]})
        assert client.post("/api/v1/inventory", json={"product_id": product["id"]}).status_code == 409

    def test_orphaned_items_are_skipped(self, client, product):
        client.post("/api/v1/inventory", json={"product_id": product["id"]})
        client.delete(f"/api/v1/products/{product['id']}")

        assert client.get("/api/v1/inventory").json() == []

    def test_update_item_and_log(self, client, product):
        client.post("/api/v1/inventory", json={"product_id": product["id"]})

        response = client.patch(f"/api/v1/inventory/{product['id']}", json={"size_quantities": {"S": 5, "M": 1}})
        assert response.status_code == 200

        logs = client.get("/api/v1/logs", params={"category": "inventory"}).json()
        messages = [entry["message"] for entry in logs]
        assert 'Updated quantities for "Essentials Hoodie"' in messages
        update_entry = next(entry for entry in logs if entry["message"].startswith("Updated"))
        assert update_entry["details"]["changes"] == "S: 2→5"

    def test_update_item_errors(self, client, product):
        assert client.patch(f"/api/v1/inventory/{product['id']}", json={"size_quantities": {}}).status_code == 404
        assert client.patch(f"/api/v1/inventory/{product['id']}", json={}).status_code == 400

    def test_batch_update(self, client, product):
        other = client.post("/api/v1/products", json={"name": "Tee", "image": "t.jpg", "sizes": ["M"]}).json()
        client.post("/api/v1/inventory", json={"product_id": product["id"]})
        client.post("/api/v1/inventory", json={"product_id": other["id"]})

        response = client.patch("/api/v1/inventory", json={"updates": [
            {"product_id": product["id"], "size_quantities": {"S": 0}},
            {"product_id": other["id"], "size_quantities": {"M": 4}},
            {"product_id": "untracked", "size_quantities": {"M": 1}},
        ]})

        assert response.status_code == 200
        assert response.json()["updated"] == 2
        logs = client.get("/api/v1/logs", params={"category": "inventory"}).json()
        assert any(entry["message"] == "Updated 2 products" for entry in logs)

    def test_batch_update_requires_updates(self, client):
        assert client.patch("/api/v1/inventory", json={"updates": []}).status_code == 400
        assert client.patch("/api/v1/inventory", json={}).status_code == 400

    def test_remove(self, client, product):
        client.post("/api/v1/inventory", json={"product_id": product["id"]})

        assert client.delete(f"/api/v1/inventory/{product['id']}").status_code == 200
        assert client.delete(f"/api/v1/inventory/{product['id']}").status_code == 404

        removal = client.get("/api/v1/logs").json()[0]
        assert removal["message"] == 'Removed "Essentials Hoodie" from inventory'
        assert removal["details"]["sizes_and_quantities_summary"] == "M: 1, S: 2"
