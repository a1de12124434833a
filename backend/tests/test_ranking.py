"""
Tests for worklist filtering and ranking.
"""

from dataclasses import dataclass
from datetime import datetime

import pytest

from florist_api.services.labels import LabelPriorityTable
from florist_api.services.ranking import (
    TIER_MINE,
    TIER_OTHERS,
    TIER_UNASSIGNED,
    WorklistFilters,
    matches_search,
    ownership_tier,
    parse_timeslot,
    rank_orders,
    summarize_worklist,
)
from shared.config.constants import LabelCategory, OrderStatus
from shared.utils.exceptions import InvalidArgumentError


@dataclass
class FakeOrder:
    id: str
    product_name: str = "Bouquet"
    timeslot: str | None = "9:00 AM - 11:00 AM"
    assigned_florist_id: str | None = None
    status: str = OrderStatus.PENDING
    store_id: str = "store-1"
    variant: str | None = None
    remarks: str | None = None
    customizations: str | None = None
    difficulty_label: str | None = None
    product_type_label: str | None = None
    assigned_at: datetime | None = None


@dataclass
class FakeLabel:
    category: str
    name: str
    priority: int


PRIORITIES = LabelPriorityTable.from_labels([
    FakeLabel(LabelCategory.DIFFICULTY, "Easy", 1),
    FakeLabel(LabelCategory.DIFFICULTY, "Medium", 2),
    FakeLabel(LabelCategory.DIFFICULTY, "Hard", 3),
    FakeLabel(LabelCategory.PRODUCT_TYPE, "Bouquet", 1),
    FakeLabel(LabelCategory.PRODUCT_TYPE, "Vase", 2),
])


def ids(orders):
    return [order.id for order in orders]


class TestParseTimeslot:
    """Start-of-range parsing for the timeslot sort key."""

    @pytest.mark.parametrize(
        "timeslot, minutes",
        [
            ("9:00 AM - 11:00 AM", 540),
            ("9:00 AM", 540),
            ("8:30 am", 510),
            ("12:00 PM - 2:00 PM", 720),
            ("12:15 AM", 15),
            ("12:30 PM to 2 PM", 750),
            ("2 PM", 840),
            ("14:00-16:00", 840),
            ("9:00 a.m. – 11:00 a.m.", 540),
        ],
    )
    def test_parses_start_of_range(self, timeslot, minutes):
        assert parse_timeslot(timeslot) == minutes

    @pytest.mark.parametrize("timeslot", [None, "", "anytime", "13:00 PM", "25:00", "9:75 AM"])
    def test_unreadable_timeslot_is_none(self, timeslot):
        assert parse_timeslot(timeslot) is None


class TestOwnershipTier:

    def test_tiers(self):
        assert ownership_tier(FakeOrder("a", assigned_florist_id="me"), "me") == TIER_MINE
        assert ownership_tier(FakeOrder("b"), "me") == TIER_UNASSIGNED
        assert ownership_tier(FakeOrder("c", assigned_florist_id="you"), "me") == TIER_OTHERS

    def test_anonymous_viewer_owns_nothing(self):
        assert ownership_tier(FakeOrder("a", assigned_florist_id="me"), None) == TIER_OTHERS


class TestRankOrders:
    """Hierarchical sort: tier, timeslot, name, difficulty, product type."""

    def test_ownership_tier_beats_earlier_timeslot(self):
        a = FakeOrder("A", product_name="Rose Bouquet", timeslot="9:00 AM")
        b = FakeOrder(
            "B", product_name="Lily Vase", timeslot="9:00 AM",
            assigned_florist_id="me", status=OrderStatus.ASSIGNED,
        )
        c = FakeOrder(
            "C", product_name="Tulip Box", timeslot="8:30 AM",
            assigned_florist_id="someone-else", status=OrderStatus.ASSIGNED,
        )

        assert ids(rank_orders([a, b, c], "me")) == ["B", "A", "C"]

    def test_timeslot_orders_within_a_tier(self):
        orders = [
            FakeOrder("late", timeslot="2:00 PM - 4:00 PM"),
            FakeOrder("early", timeslot="8:00 AM - 10:00 AM"),
            FakeOrder("noon", timeslot="12:00 PM - 2:00 PM"),
        ]
        assert ids(rank_orders(orders, "me")) == ["early", "noon", "late"]

    def test_unparseable_timeslots_sort_last_in_input_order(self):
        orders = [
            FakeOrder("x", timeslot="whenever", product_name="Zinnia"),
            FakeOrder("timed", timeslot="3:00 PM"),
            FakeOrder("y", timeslot=None, product_name="Aster"),
        ]
        assert ids(rank_orders(orders, "me")) == ["timed", "x", "y"]

    def test_product_name_is_case_insensitive(self):
        orders = [
            FakeOrder("2", product_name="tulip"),
            FakeOrder("1", product_name="Orchid"),
            FakeOrder("3", product_name="ROSE"),
        ]
        assert ids(rank_orders(orders, "me")) == ["1", "3", "2"]

    def test_difficulty_then_product_type_break_ties(self):
        orders = [
            FakeOrder("hard", difficulty_label="Hard", product_type_label="Bouquet"),
            FakeOrder("easy-vase", difficulty_label="Easy", product_type_label="Vase"),
            FakeOrder("easy-bouquet", difficulty_label="Easy", product_type_label="Bouquet"),
        ]
        assert ids(rank_orders(orders, "me", priorities=PRIORITIES)) == [
            "easy-bouquet",
            "easy-vase",
            "hard",
        ]

    def test_unknown_label_sorts_after_every_known_label(self):
        orders = [
            FakeOrder("missing", difficulty_label=None),
            FakeOrder("unregistered", difficulty_label="Extreme"),
            FakeOrder("hard", difficulty_label="Hard"),
        ]
        ranked = rank_orders(orders, "me", priorities=PRIORITIES)
        assert ids(ranked) == ["hard", "missing", "unregistered"]

    def test_full_ties_keep_input_order(self):
        orders = [FakeOrder(str(i)) for i in range(5)]
        assert ids(rank_orders(orders, "me")) == ["0", "1", "2", "3", "4"]

    def test_input_is_not_modified(self):
        orders = [FakeOrder("b", timeslot="3:00 PM"), FakeOrder("a", timeslot="8:00 AM")]
        rank_orders(orders, "me")
        assert ids(orders) == ["b", "a"]

    def test_empty_input(self):
        assert rank_orders([], "me") == []


class TestFilters:

    def test_status_filter(self):
        orders = [
            FakeOrder("p"),
            FakeOrder("a", status=OrderStatus.ASSIGNED, assigned_florist_id="x"),
            FakeOrder("c", status=OrderStatus.COMPLETED, assigned_florist_id="x"),
        ]
        filters = WorklistFilters(status=OrderStatus.ASSIGNED)
        assert ids(rank_orders(orders, "me", filters=filters)) == ["a"]

    def test_unknown_status_filter_rejected(self):
        with pytest.raises(InvalidArgumentError):
            WorklistFilters(status="DONE")

    def test_store_filter(self):
        orders = [FakeOrder("1", store_id="store-1"), FakeOrder("2", store_id="store-2")]
        filters = WorklistFilters(store_ids=frozenset({"store-2"}))
        assert ids(rank_orders(orders, "me", filters=filters)) == ["2"]

    def test_all_stores_does_not_restrict(self):
        orders = [FakeOrder("1", store_id="store-1"), FakeOrder("2", store_id="store-2")]
        filters = WorklistFilters(store_ids=frozenset({"all"}))
        assert ids(rank_orders(orders, "me", filters=filters)) == ["1", "2"]

    def test_label_filters_are_conjunctive(self):
        orders = [
            FakeOrder("1", difficulty_label="Easy", product_type_label="Vase"),
            FakeOrder("2", difficulty_label="Easy", product_type_label="Bouquet"),
            FakeOrder("3", difficulty_label="Hard", product_type_label="Vase"),
        ]
        filters = WorklistFilters(difficulty="Easy", product_type="Vase")
        assert ids(rank_orders(orders, "me", filters=filters)) == ["1"]


class TestSearch:
    """Case-insensitive substring search across text fields."""

    def test_matches_product_name_remarks_and_variant(self):
        orders = [
            FakeOrder("name", product_name="Rose Elegance"),
            FakeOrder("remarks", product_name="Lily", remarks="add a ROSE petal card"),
            FakeOrder("variant", product_name="Mixed", variant="Red roses / 12 stalks"),
            FakeOrder("none", product_name="Tulip Box"),
        ]
        assert set(ids(rank_orders(orders, "me", search_query="rose"))) == {"name", "remarks", "variant"}

    def test_matches_order_id_and_labels(self):
        order = FakeOrder("WF-1042", difficulty_label="Very Hard")
        assert matches_search(order, "wf-10")
        assert matches_search(order, "very hard")

    def test_blank_query_matches_everything(self):
        order = FakeOrder("1")
        assert matches_search(order, None)
        assert matches_search(order, "   ")

    def test_search_and_filters_combine(self):
        orders = [
            FakeOrder("1", product_name="Rose", store_id="store-1"),
            FakeOrder("2", product_name="Rose", store_id="store-2"),
        ]
        filters = WorklistFilters(store_ids=frozenset({"store-2"}))
        assert ids(rank_orders(orders, "me", filters=filters, search_query="rose")) == ["2"]


class TestSummary:

    def test_counts_by_status(self):
        summary = summarize_worklist([
            FakeOrder("1"),
            FakeOrder("2"),
            FakeOrder("3", status=OrderStatus.ASSIGNED),
            FakeOrder("4", status=OrderStatus.COMPLETED),
        ])
        assert (summary.total, summary.pending, summary.assigned, summary.completed) == (4, 2, 1, 1)
