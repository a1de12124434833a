"""
Tests for the orders endpoints: worklist reads and workflow actions.
"""

from datetime import timedelta

from shared.config.constants import OrderStatus
from tests.conftest import NOW, TODAY, auth_header


class TestAuthentication:

    def test_missing_token(self, client):
        response = client.get("/api/orders")
        assert response.status_code == 401

    def test_garbage_token(self, client):
        response = client.get("/api/orders", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_token_without_known_role(self, client):
        response = client.get("/api/orders", headers=auth_header("x", "WAITER"))
        assert response.status_code == 401


class TestWorklist:

    def test_ranked_for_caller(self, client, make_order, florist_headers):
        make_order(id="A", product_name="Rose Bouquet", timeslot="9:00 AM")
        make_order(
            id="B", product_name="Lily Vase", timeslot="9:00 AM",
            status=OrderStatus.ASSIGNED, assigned_florist_id="florist-1", assigned_at=NOW, version=1,
        )
        make_order(
            id="C", product_name="Tulip Box", timeslot="8:30 AM",
            status=OrderStatus.ASSIGNED, assigned_florist_id="florist-2", assigned_at=NOW, version=1,
        )

        response = client.get("/api/orders", params={"date": TODAY.isoformat()}, headers=florist_headers)

        assert response.status_code == 200
        body = response.json()
        assert [o["id"] for o in body["orders"]] == ["B", "A", "C"]
        assert body["summary"] == {"total": 3, "pending": 1, "assigned": 2, "completed": 0}

    def test_defaults_to_today_in_operating_zone(self, client, make_order, florist_headers):
        make_order(id="today-1")
        make_order(id="tomorrow-1", delivery_date=TODAY + timedelta(days=1))

        response = client.get("/api/orders", headers=florist_headers)

        assert response.status_code == 200
        assert response.json()["date"] == TODAY.isoformat()
        assert [o["id"] for o in response.json()["orders"]] == ["today-1"]

    def test_orders_carry_product_labels(self, client, make_order, florist_headers):
        make_order(id="o-1", product_id="prod-17", product_name="Orchid Paradise")

        order = client.get("/api/orders", headers=florist_headers).json()["orders"][0]

        assert order["difficulty_label"] == "Very Hard"
        assert order["product_type_label"] == "Arrangement"

    def test_filters_and_search(self, client, make_order, florist_headers):
        make_order(id="rose", product_id="prod-15", product_name="Rose Elegance")
        make_order(id="sun", product_id="prod-16", product_name="Sunflower Delight")
        make_order(id="other-store", store_id="store-2", product_id=None, product_name="Rose Garden")

        def ids(**params):
            response = client.get("/api/orders", params=params, headers=florist_headers)
            assert response.status_code == 200
            return [o["id"] for o in response.json()["orders"]]

        assert ids(q="ROSE") == ["rose", "other-store"]
        assert ids(q="rose", store="store-1") == ["rose"]
        assert ids(difficulty="Easy") == ["sun"]
        assert ids(productType="Bouquet") == ["rose"]
        assert ids(status="ASSIGNED") == []
        assert sorted(ids(store="all")) == ["other-store", "rose", "sun"]

    def test_summary_ignores_search(self, client, make_order, florist_headers):
        make_order(id="rose", product_id="prod-15", product_name="Rose Elegance")
        make_order(id="sun", product_id="prod-16", product_name="Sunflower Delight")

        body = client.get("/api/orders", params={"q": "rose"}, headers=florist_headers).json()

        assert len(body["orders"]) == 1
        assert body["summary"]["total"] == 2

    def test_unknown_status_filter(self, client, florist_headers):
        response = client.get("/api/orders", params={"status": "DONE"}, headers=florist_headers)
        assert response.status_code == 422

    def test_summary_endpoint(self, client, make_order, florist_headers):
        make_order()
        make_order(status=OrderStatus.COMPLETED, assigned_florist_id="florist-1", assigned_at=NOW, completed_at=NOW)

        response = client.get("/api/orders/summary", headers=florist_headers)

        assert response.json() == {"total": 2, "pending": 1, "assigned": 0, "completed": 1}

    def test_get_single_order(self, client, make_order, florist_headers):
        order = make_order()
        response = client.get(f"/api/orders/{order.id}", headers=florist_headers)
        assert response.status_code == 200
        assert response.json()["id"] == order.id

        assert client.get("/api/orders/missing", headers=florist_headers).status_code == 404


class TestAssignEndpoint:

    def test_florist_claims(self, client, make_order, florist_headers):
        order = make_order()

        response = client.patch(f"/api/orders/{order.id}/assign", headers=florist_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == OrderStatus.ASSIGNED
        assert body["assigned_florist_id"] == "florist-1"
        assert body["version"] == 1

    def test_florist_claims_with_own_id(self, client, make_order, florist_headers):
        order = make_order()
        response = client.patch(
            f"/api/orders/{order.id}/assign", json={"floristId": "florist-1"}, headers=florist_headers
        )
        assert response.status_code == 200

    def test_second_claim_conflicts(self, client, make_order, florist_headers, other_florist_headers):
        order = make_order()
        client.patch(f"/api/orders/{order.id}/assign", headers=florist_headers)

        response = client.patch(f"/api/orders/{order.id}/assign", headers=other_florist_headers)

        assert response.status_code == 409

    def test_florist_cannot_assign_someone_else(self, client, make_order, florist_headers):
        order = make_order()
        response = client.patch(
            f"/api/orders/{order.id}/assign", json={"floristId": "florist-2"}, headers=florist_headers
        )
        assert response.status_code == 403

    def test_admin_reassigns(self, client, make_order, florist_headers, admin_headers):
        order = make_order()
        client.patch(f"/api/orders/{order.id}/assign", headers=florist_headers)

        response = client.patch(
            f"/api/orders/{order.id}/assign", json={"floristId": "florist-3"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["assigned_florist_id"] == "florist-3"

    def test_admin_must_name_florist(self, client, make_order, admin_headers):
        order = make_order()
        response = client.patch(f"/api/orders/{order.id}/assign", headers=admin_headers)
        assert response.status_code == 400

    def test_unknown_order(self, client, seed_reference, florist_headers):
        response = client.patch("/api/orders/missing/assign", headers=florist_headers)
        assert response.status_code == 404


class TestCompleteEndpoint:

    def test_holder_completes(self, client, clock, make_order, florist_headers):
        order = make_order()
        client.patch(f"/api/orders/{order.id}/assign", headers=florist_headers)
        clock.advance(minutes=30)

        response = client.patch(f"/api/orders/{order.id}/complete", headers=florist_headers)

        assert response.status_code == 200
        assert response.json()["status"] == OrderStatus.COMPLETED

    def test_other_florist_forbidden(self, client, make_order, florist_headers, other_florist_headers):
        order = make_order()
        client.patch(f"/api/orders/{order.id}/assign", headers=florist_headers)

        response = client.patch(f"/api/orders/{order.id}/complete", headers=other_florist_headers)

        assert response.status_code == 403

    def test_pending_conflicts(self, client, make_order, florist_headers):
        order = make_order()
        response = client.patch(f"/api/orders/{order.id}/complete", headers=florist_headers)
        assert response.status_code == 409


class TestUnassignEndpoint:

    def test_admin_unassigns(self, client, make_order, florist_headers, admin_headers):
        order = make_order()
        client.patch(f"/api/orders/{order.id}/assign", headers=florist_headers)

        response = client.patch(f"/api/orders/{order.id}/unassign", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["status"] == OrderStatus.PENDING
        assert response.json()["assigned_florist_id"] is None

    def test_florist_forbidden(self, client, make_order, florist_headers):
        order = make_order()
        client.patch(f"/api/orders/{order.id}/assign", headers=florist_headers)

        response = client.patch(f"/api/orders/{order.id}/unassign", headers=florist_headers)

        assert response.status_code == 403


class TestUpdateEndpoint:

    def test_admin_updates_remarks(self, client, make_order, admin_headers):
        order = make_order(customizations="Card: Congrats")

        response = client.patch(
            f"/api/orders/{order.id}", json={"remarks": "Ring twice"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["remarks"] == "Ring twice"
        assert response.json()["customizations"] == "Card: Congrats"

    def test_admin_updates_both_fields(self, client, make_order, admin_headers):
        order = make_order(remarks="old", customizations="old")

        response = client.patch(
            f"/api/orders/{order.id}",
            json={"remarks": "Ring twice", "customizations": None},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["remarks"] == "Ring twice"
        assert response.json()["customizations"] is None
        assert response.json()["version"] == 0

    def test_florist_forbidden(self, client, make_order, florist_headers):
        order = make_order()
        response = client.patch(f"/api/orders/{order.id}", json={"remarks": "x"}, headers=florist_headers)
        assert response.status_code == 403

    def test_empty_body_rejected(self, client, make_order, admin_headers):
        order = make_order()
        response = client.patch(f"/api/orders/{order.id}", json={}, headers=admin_headers)
        assert response.status_code == 400


class TestIngestEndpoint:

    def test_admin_ingests(self, client, seed_reference, admin_headers, florist_headers):
        payload = {
            "date": TODAY.isoformat(),
            "orders": [
                {
                    "id": "wf-1",
                    "storeId": "store-1",
                    "productId": "prod-2",
                    "productName": "Unconditional Love",
                    "productVariant": "7 stalks",
                    "timeslot": "1:00 PM - 3:00 PM",
                },
            ],
        }

        response = client.post("/api/orders/ingest", json=payload, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"created": 1, "updated": 0}
        orders = client.get("/api/orders", headers=florist_headers).json()["orders"]
        assert orders[0]["variant"] == "7 stalks"
        assert orders[0]["difficulty_label"] == "Hard"

    def test_florist_forbidden(self, client, seed_reference, florist_headers):
        response = client.post(
            "/api/orders/ingest", json={"date": TODAY.isoformat(), "orders": []}, headers=florist_headers
        )
        assert response.status_code == 403
