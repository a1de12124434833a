"""
Florist performance analytics.

Stats are derived from completed orders only and never stored. The average
completion time is the exact mean of (completed_at - assigned_at) in
minutes, rounded half-to-even.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from fractions import Fraction
from typing import Protocol
from zoneinfo import ZoneInfo

from florist_api.services.clock import as_utc
from shared.config.constants import ALL_STORES, TimeFrame
from shared.utils.exceptions import InvalidArgumentError

_MICROSECONDS_PER_MINUTE = 60 * 1_000_000


class CompletedOrderLike(Protocol):
    store_id: str
    assigned_florist_id: str | None
    assigned_at: datetime | None
    completed_at: datetime | None


class FloristLike(Protocol):
    id: str
    name: str


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval [start, end) of zone-aware instants."""

    timeframe: str
    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


@dataclass
class StoreStats:
    store_id: str
    completed_count: int
    average_completion_minutes: int | None


@dataclass
class FloristStats:
    florist_id: str
    florist_name: str | None
    completed_count: int
    average_completion_minutes: int | None
    store_breakdown: list[StoreStats] = field(default_factory=list)


# =============================================================================
# Windows
# =============================================================================


def normalize_timeframe(value: str | None) -> str:
    """Canonical timeframe name; daily/weekly/monthly are accepted too."""
    if value is None or not value.strip():
        return TimeFrame.DEFAULT
    name = value.strip().lower()
    name = TimeFrame.ALIASES.get(name, name)
    if name not in TimeFrame.ALL:
        raise InvalidArgumentError(
            f"Unknown timeframe '{value}', expected one of: {', '.join(TimeFrame.ALL)}",
            field="timeframe",
            value=value,
        )
    return name


def _first_of_next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def resolve_window(timeframe: str | None, now: datetime, tz: ZoneInfo) -> TimeWindow:
    """
    Calendar window containing now, in the operating zone.

    today: local midnight to the next local midnight
    week:  Monday 00:00 to the following Monday 00:00
    month: the 1st 00:00 to the 1st of the next month 00:00
    """
    name = normalize_timeframe(timeframe)
    today = as_utc(now).astimezone(tz).date()

    if name == TimeFrame.TODAY:
        first, after = today, today + timedelta(days=1)
    elif name == TimeFrame.WEEK:
        first = today - timedelta(days=today.weekday())
        after = first + timedelta(days=7)
    else:
        first = today.replace(day=1)
        after = _first_of_next_month(first)

    return TimeWindow(
        timeframe=name,
        start=datetime.combine(first, time.min, tzinfo=tz),
        end=datetime.combine(after, time.min, tzinfo=tz),
    )


# =============================================================================
# Aggregation
# =============================================================================


def average_completion_minutes(durations: Sequence[timedelta]) -> int | None:
    """Mean duration in whole minutes, half-to-even; None when empty."""
    if not durations:
        return None
    total = sum(duration // timedelta(microseconds=1) for duration in durations)
    return round(Fraction(total, len(durations) * _MICROSECONDS_PER_MINUTE))


def _durations(orders: Iterable[CompletedOrderLike]) -> list[timedelta]:
    return [as_utc(o.completed_at) - as_utc(o.assigned_at) for o in orders]


def _in_scope(order: CompletedOrderLike, window: TimeWindow, stores: Collection[str] | None) -> bool:
    if order.assigned_florist_id is None or order.assigned_at is None or order.completed_at is None:
        return False
    if stores is not None and order.store_id not in stores:
        return False
    return window.contains(as_utc(order.completed_at))


def compute_stats(
    completed_orders: Iterable[CompletedOrderLike],
    window: TimeWindow,
    store_ids: Collection[str] | None = None,
    florists: Iterable[FloristLike] = (),
) -> list[FloristStats]:
    """
    Per-florist completion stats within window.

    Every roster florist is reported, with completed_count 0 and no average
    when they completed nothing. Florists with completions who are missing
    from the roster are reported without a name. Ordered by completed_count
    descending, then florist id.
    """
    stores = None
    if store_ids and ALL_STORES not in store_ids:
        stores = set(store_ids)

    grouped: dict[str, list[CompletedOrderLike]] = defaultdict(list)
    for order in completed_orders:
        if _in_scope(order, window, stores):
            grouped[order.assigned_florist_id].append(order)

    names: dict[str, str | None] = {florist.id: florist.name for florist in florists}
    for florist_id in grouped:
        names.setdefault(florist_id, None)

    results = []
    for florist_id, name in names.items():
        done = grouped.get(florist_id, [])
        per_store: dict[str, list[CompletedOrderLike]] = defaultdict(list)
        for order in done:
            per_store[order.store_id].append(order)

        results.append(
            FloristStats(
                florist_id=florist_id,
                florist_name=name,
                completed_count=len(done),
                average_completion_minutes=average_completion_minutes(_durations(done)),
                store_breakdown=[
                    StoreStats(
                        store_id=store_id,
                        completed_count=len(store_orders),
                        average_completion_minutes=average_completion_minutes(_durations(store_orders)),
                    )
                    for store_id, store_orders in sorted(per_store.items())
                ],
            )
        )

    results.sort(key=lambda stats: (-stats.completed_count, stats.florist_id))
    return results
