"""
Worklist filtering and ranking.

Pure functions over order-like objects (ORM rows or OrderOutput schemas).
Nothing here touches the database or raises for a malformed order: an
unparseable timeslot or an unknown label only moves the order down.

Sort precedence:
1. ownership tier: mine, then unassigned, then someone else's
2. timeslot start, earliest first, unparseable last in input order
3. product name, case-insensitive
4. difficulty label priority, unknown last
5. product type label priority, unknown last
Remaining ties keep input order.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol, TypeVar

from florist_api.services.labels import LabelPriorityTable, priority_sort_key
from shared.config.constants import ALL_STORES, LabelCategory, OrderStatus, StatusFilter
from shared.utils.exceptions import InvalidArgumentError
from shared.utils.schemas import WorklistSummary


class OrderLike(Protocol):
    id: str
    store_id: str
    product_name: str
    variant: str | None
    timeslot: str | None
    remarks: str | None
    customizations: str | None
    status: str
    assigned_florist_id: str | None
    assigned_at: datetime | None

    @property
    def difficulty_label(self) -> str | None: ...

    @property
    def product_type_label(self) -> str | None: ...


OrderT = TypeVar("OrderT", bound=OrderLike)

TIER_MINE = 0
TIER_UNASSIGNED = 1
TIER_OTHERS = 2


@dataclass(frozen=True)
class WorklistFilters:
    """Conjunctive worklist filters. Defaults pass everything."""

    status: str = StatusFilter.ALL
    store_ids: frozenset[str] = field(default_factory=frozenset)
    difficulty: str | None = None
    product_type: str | None = None

    def __post_init__(self) -> None:
        if self.status not in StatusFilter.VALUES:
            raise InvalidArgumentError(
                f"Unknown status filter '{self.status}'", field="status", value=self.status
            )
        object.__setattr__(self, "store_ids", frozenset(self.store_ids or ()))

    @property
    def restricts_stores(self) -> bool:
        return bool(self.store_ids) and ALL_STORES not in self.store_ids


# =============================================================================
# Timeslots
# =============================================================================

# Start of a range: everything before "-", an en/em dash, or the word "to"
_RANGE_SEPARATOR = re.compile(r"\s*(?:-|–|—|\bto\b)\s*", re.IGNORECASE)
_CLOCK_TIME = re.compile(
    r"^(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?\s*(?:(?P<meridiem>[ap])\.?\s*m\.?)?$",
    re.IGNORECASE,
)


def parse_timeslot(timeslot: str | None) -> int | None:
    """
    Minutes since midnight of the timeslot's start, or None if unreadable.

    >>> parse_timeslot("9:00 AM - 11:00 AM")
    540
    >>> parse_timeslot("12:30 PM to 2 PM")
    750
    >>> parse_timeslot("14:00-16:00")
    840
    >>> parse_timeslot("anytime") is None
    True
    """
    if not timeslot:
        return None
    start = _RANGE_SEPARATOR.split(timeslot.strip(), maxsplit=1)[0].strip()
    match = _CLOCK_TIME.match(start)
    if match is None:
        return None

    hour = int(match.group("hour"))
    minute = int(match.group("minute") or 0)
    meridiem = match.group("meridiem")
    if minute > 59:
        return None

    if meridiem:
        if not 1 <= hour <= 12:
            return None
        hour = hour % 12
        if meridiem.lower() == "p":
            hour += 12
    elif hour > 23:
        return None

    return hour * 60 + minute


# =============================================================================
# Filtering
# =============================================================================


def _search_fields(order: OrderLike) -> Iterable[str | None]:
    return (
        order.id,
        order.product_name,
        order.variant,
        order.remarks,
        order.customizations,
        order.difficulty_label,
        order.product_type_label,
        order.timeslot,
    )


def matches_search(order: OrderLike, query: str | None) -> bool:
    """Case-insensitive substring match on any text field. Blank matches all."""
    needle = (query or "").strip().casefold()
    if not needle:
        return True
    return any(value and needle in value.casefold() for value in _search_fields(order))


def matches_filters(order: OrderLike, filters: WorklistFilters) -> bool:
    if filters.status != StatusFilter.ALL and order.status != filters.status:
        return False
    if filters.restricts_stores and order.store_id not in filters.store_ids:
        return False
    if filters.difficulty and order.difficulty_label != filters.difficulty:
        return False
    if filters.product_type and order.product_type_label != filters.product_type:
        return False
    return True


# =============================================================================
# Ranking
# =============================================================================


def ownership_tier(order: OrderLike, current_user_id: str | None) -> int:
    if order.assigned_florist_id is None:
        return TIER_UNASSIGNED
    if current_user_id is not None and order.assigned_florist_id == current_user_id:
        return TIER_MINE
    return TIER_OTHERS


def rank_orders(
    orders: Sequence[OrderT],
    current_user_id: str | None,
    filters: WorklistFilters | None = None,
    search_query: str | None = None,
    priorities: LabelPriorityTable | None = None,
) -> list[OrderT]:
    """
    Filter then sort orders for the worklist of current_user_id.

    Returns a new list; the input is not modified. Identical input gives an
    identical result.
    """
    filters = filters or WorklistFilters()
    priorities = priorities or LabelPriorityTable()

    def sort_key(indexed: tuple[int, OrderT]) -> tuple:
        position, order = indexed
        minutes = parse_timeslot(order.timeslot)
        slot = (0, minutes) if minutes is not None else (1, position)
        return (
            ownership_tier(order, current_user_id),
            slot,
            (order.product_name or "").casefold(),
            priority_sort_key(priorities.resolve(LabelCategory.DIFFICULTY, order.difficulty_label)),
            priority_sort_key(priorities.resolve(LabelCategory.PRODUCT_TYPE, order.product_type_label)),
            position,
        )

    candidates = [
        (position, order)
        for position, order in enumerate(orders)
        if matches_filters(order, filters) and matches_search(order, search_query)
    ]
    candidates.sort(key=sort_key)
    return [order for _, order in candidates]


def summarize_worklist(orders: Iterable[OrderLike]) -> WorklistSummary:
    """Status counts for the worklist header."""
    counts = Counter(order.status for order in orders)
    return WorklistSummary(
        total=sum(counts.values()),
        pending=counts[OrderStatus.PENDING],
        assigned=counts[OrderStatus.ASSIGNED],
        completed=counts[OrderStatus.COMPLETED],
    )
