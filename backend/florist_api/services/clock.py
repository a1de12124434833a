"""
Time helpers shared by the workflow, the worklist and analytics.

Services take a Clock so tests can pin "now". Timestamps are stored and
compared in UTC; drivers that drop the zone (SQLite) hand back naive values
that are UTC by construction.
"""

from datetime import datetime, timezone
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from shared.config.settings import settings
from shared.utils.exceptions import InvalidArgumentError

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def operating_zone(name: str | None = None) -> ZoneInfo:
    """The configured operating time zone."""
    zone_name = name or settings.operating_timezone
    try:
        return ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise InvalidArgumentError(f"Unknown time zone '{zone_name}'", timezone=zone_name)
