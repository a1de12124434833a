"""
Tests for the label registry and product label endpoints.
"""


class TestListLabels:

    def test_lists_all(self, client, seed_reference, florist_headers):
        response = client.get("/api/labels", headers=florist_headers)

        assert response.status_code == 200
        assert len(response.json()) == 9

    def test_by_category(self, client, seed_reference, florist_headers):
        response = client.get("/api/labels", params={"category": "productType"}, headers=florist_headers)

        names = [label["name"] for label in response.json()]
        assert names == ["Bouquet", "Vase", "Arrangement", "Wreath", "Bundle"]

    def test_unknown_category(self, client, seed_reference, florist_headers):
        response = client.get("/api/labels", params={"category": "size"}, headers=florist_headers)
        assert response.status_code == 400

    def test_get_one(self, client, seed_reference, florist_headers):
        response = client.get("/api/labels/difficulty-easy", headers=florist_headers)
        assert response.json()["priority"] == 1

        assert client.get("/api/labels/missing", headers=florist_headers).status_code == 404


class TestWriteLabels:

    def test_admin_creates(self, client, seed_reference, admin_headers):
        response = client.post(
            "/api/labels",
            json={"name": "Rush", "category": "custom", "priority": 0, "color": "#ff0000"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Rush"

    def test_florist_forbidden(self, client, seed_reference, florist_headers):
        response = client.post(
            "/api/labels",
            json={"name": "Rush", "category": "custom", "priority": 0},
            headers=florist_headers,
        )
        assert response.status_code == 403

    def test_duplicate_conflicts(self, client, seed_reference, admin_headers):
        response = client.post(
            "/api/labels",
            json={"name": "Easy", "category": "difficulty", "priority": 7},
            headers=admin_headers,
        )
        assert response.status_code == 409

    def test_negative_priority_rejected(self, client, seed_reference, admin_headers):
        response = client.post(
            "/api/labels",
            json={"name": "Odd", "category": "difficulty", "priority": -1},
            headers=admin_headers,
        )
        assert response.status_code == 400

    def test_non_numeric_priority_rejected(self, client, seed_reference, admin_headers):
        response = client.post(
            "/api/labels",
            json={"name": "Odd", "category": "difficulty", "priority": "high"},
            headers=admin_headers,
        )
        assert response.status_code == 422

    def test_reprioritising_changes_worklist_order(self, client, make_order, admin_headers, florist_headers):
        make_order(id="easy", product_id="prod-4", product_name="Same")
        make_order(id="hard", product_id="prod-2", product_name="Same")

        before = [o["id"] for o in client.get("/api/orders", headers=florist_headers).json()["orders"]]
        client.put(
            "/api/labels/difficulty-hard",
            json={"name": "Hard", "category": "difficulty", "priority": 0, "color": "#f97316"},
            headers=admin_headers,
        )
        after = [o["id"] for o in client.get("/api/orders", headers=florist_headers).json()["orders"]]

        assert before == ["easy", "hard"]
        assert after == ["hard", "easy"]

    def test_delete(self, client, seed_reference, admin_headers, florist_headers):
        response = client.delete("/api/labels/difficulty-very-hard", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "difficulty-very-hard", "products_relabelled": 1}
        assert client.get("/api/labels/difficulty-very-hard", headers=florist_headers).status_code == 404


class TestProducts:

    def test_list_products(self, client, seed_reference, florist_headers):
        response = client.get("/api/products", params={"store": "store-1"}, headers=florist_headers)

        assert response.status_code == 200
        assert {p["id"] for p in response.json()} == {
            "prod-1", "prod-2", "prod-3", "prod-4", "prod-15", "prod-16", "prod-17",
        }

    def test_admin_sets_labels(self, client, make_order, admin_headers, florist_headers):
        make_order(id="o-1", product_id="prod-4", product_name="Daily Surprise")

        response = client.patch(
            "/api/products/prod-4/labels",
            json={"difficultyLabel": "Very Hard", "productTypeLabel": "Wreath"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        order = client.get("/api/orders/o-1", headers=florist_headers).json()
        assert order["difficulty_label"] == "Very Hard"
        assert order["product_type_label"] == "Wreath"

    def test_unknown_label_name(self, client, seed_reference, admin_headers):
        response = client.patch(
            "/api/products/prod-4/labels",
            json={"difficultyLabel": "Impossible"},
            headers=admin_headers,
        )
        assert response.status_code == 400
