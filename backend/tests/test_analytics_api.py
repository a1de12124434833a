"""
Tests for the analytics endpoint.
"""

from datetime import timedelta

from shared.config.constants import OrderStatus
from tests.conftest import NOW


def completed_order(make_order, florist_id, minutes, store_id="store-1", finished=NOW - timedelta(hours=1)):
    return make_order(
        store_id=store_id,
        product_id=None,
        status=OrderStatus.COMPLETED,
        assigned_florist_id=florist_id,
        assigned_at=finished - timedelta(minutes=minutes),
        completed_at=finished,
        version=2,
    )


class TestAnalyticsEndpoint:

    def test_average_of_20_and_40(self, client, make_order, admin_headers):
        completed_order(make_order, "florist-1", 20)
        completed_order(make_order, "florist-1", 40)

        response = client.get("/api/analytics", params={"timeframe": "week"}, headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["timeframe"] == "week"
        assert body["timezone"] == "Asia/Singapore"
        maya = body["stats"][0]
        assert maya["florist_id"] == "florist-1"
        assert maya["florist_name"] == "Maya"
        assert maya["completed_count"] == 2
        assert maya["average_completion_minutes"] == 30

    def test_whole_roster_listed(self, client, make_order, admin_headers):
        completed_order(make_order, "florist-2", 15)

        stats = client.get("/api/analytics", headers=admin_headers).json()["stats"]

        assert [s["florist_id"] for s in stats] == [
            "florist-2", "florist-1", "florist-3", "florist-4", "florist-5",
        ]
        assert stats[1]["completed_count"] == 0
        assert stats[1]["average_completion_minutes"] is None

    def test_timeframe_today_excludes_yesterday(self, client, make_order, admin_headers):
        completed_order(make_order, "florist-1", 20, finished=NOW - timedelta(days=1))
        completed_order(make_order, "florist-1", 30)

        today = client.get("/api/analytics", params={"timeframe": "today"}, headers=admin_headers).json()
        month = client.get("/api/analytics", params={"timeframe": "monthly"}, headers=admin_headers).json()

        assert today["stats"][0]["completed_count"] == 1
        assert month["timeframe"] == "month"
        assert month["stats"][0]["completed_count"] == 2

    def test_open_orders_do_not_count(self, client, make_order, admin_headers):
        make_order(status=OrderStatus.ASSIGNED, assigned_florist_id="florist-1", assigned_at=NOW, version=1)

        stats = client.get("/api/analytics", headers=admin_headers).json()["stats"]

        assert all(s["completed_count"] == 0 for s in stats)

    def test_store_filter(self, client, make_order, admin_headers):
        completed_order(make_order, "florist-1", 10, store_id="store-1")
        completed_order(make_order, "florist-1", 50, store_id="store-2")

        body = client.get("/api/analytics", params={"store": "store-2"}, headers=admin_headers).json()
        maya = next(s for s in body["stats"] if s["florist_id"] == "florist-1")

        assert maya["completed_count"] == 1
        assert maya["average_completion_minutes"] == 50
        assert maya["store_breakdown"] == [
            {"store_id": "store-2", "completed_count": 1, "average_completion_minutes": 50}
        ]

    def test_unknown_timeframe(self, client, seed_reference, admin_headers):
        response = client.get("/api/analytics", params={"timeframe": "decade"}, headers=admin_headers)
        assert response.status_code == 400

    def test_workflow_feeds_analytics(self, client, clock, make_order, florist_headers):
        order = make_order()
        client.patch(f"/api/orders/{order.id}/assign", headers=florist_headers)
        clock.advance(minutes=45)
        client.patch(f"/api/orders/{order.id}/complete", headers=florist_headers)

        stats = client.get("/api/analytics", params={"timeframe": "today"}, headers=florist_headers).json()["stats"]

        assert stats[0]["florist_id"] == "florist-1"
        assert stats[0]["average_completion_minutes"] == 45
