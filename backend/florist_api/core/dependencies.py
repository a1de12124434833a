"""
Request-scoped dependencies shared by the routers.
"""

from datetime import date

from fastapi import Query

from florist_api.services.clock import Clock, operating_zone, utc_now
from shared.config.constants import ALL_STORES


def get_clock() -> Clock:
    """
    Source of "now" for workflow timestamps and analytics windows.

    Tests override this with app.dependency_overrides[get_clock].
    """
    return utc_now


def operating_today(clock: Clock) -> date:
    """Today's date in the operating time zone."""
    return clock().astimezone(operating_zone()).date()


def store_filter(
    store: list[str] | None = Query(
        default=None,
        description="Store ids, repeated or comma-separated. 'all' or empty means every store.",
    ),
) -> list[str]:
    """Normalize ?store=a&store=b and ?store=a,b into a list of store ids."""
    if not store:
        return []
    ids: list[str] = []
    for value in store:
        ids.extend(part.strip() for part in value.split(",") if part.strip())
    if ALL_STORES in ids:
        return []
    return ids
