"""
Centralized constants for the backend application.
Avoid magic strings and repeated constants.

Usage:
    from shared.config.constants import Roles, OrderStatus, ORDER_TRANSITIONS

    if role == Roles.ADMIN:
        ...

    if status == OrderStatus.PENDING:
        ...
"""

from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles:
    """User role constants."""

    ADMIN: Final[str] = "ADMIN"
    FLORIST: Final[str] = "FLORIST"

    ALL: Final[list[str]] = [ADMIN, FLORIST]


MANAGEMENT_ROLES: Final[frozenset[str]] = frozenset({Roles.ADMIN})
ALL_STAFF_ROLES: Final[frozenset[str]] = frozenset({Roles.ADMIN, Roles.FLORIST})


# =============================================================================
# Order Status
# =============================================================================


class OrderStatus:
    """Order workflow status constants."""

    PENDING: Final[str] = "PENDING"
    ASSIGNED: Final[str] = "ASSIGNED"
    COMPLETED: Final[str] = "COMPLETED"

    ALL: Final[list[str]] = [PENDING, ASSIGNED, COMPLETED]


class StatusFilter:
    """Worklist status filter values. ALL passes every order."""

    ALL: Final[str] = "ALL"

    VALUES: Final[list[str]] = [ALL, *OrderStatus.ALL]


# Valid order status transitions (from -> [allowed to states])
# PENDING -> ASSIGNED -> COMPLETED, with ASSIGNED -> ASSIGNED (reassign)
# and ASSIGNED -> PENDING (unassign).
ORDER_TRANSITIONS: Final[dict[str, list[str]]] = {
    OrderStatus.PENDING: [OrderStatus.ASSIGNED],
    OrderStatus.ASSIGNED: [OrderStatus.ASSIGNED, OrderStatus.COMPLETED, OrderStatus.PENDING],
    OrderStatus.COMPLETED: [],  # Terminal state
}


# =============================================================================
# Labels
# =============================================================================


class LabelCategory:
    """Product label categories."""

    DIFFICULTY: Final[str] = "difficulty"
    PRODUCT_TYPE: Final[str] = "productType"
    CUSTOM: Final[str] = "custom"

    ALL: Final[list[str]] = [DIFFICULTY, PRODUCT_TYPE, CUSTOM]


# Registry contents on a fresh database: (name, priority, color)
DEFAULT_LABELS: Final[dict[str, list[tuple[str, int, str]]]] = {
    LabelCategory.DIFFICULTY: [
        ("Easy", 1, "#22c55e"),
        ("Medium", 2, "#eab308"),
        ("Hard", 3, "#f97316"),
        ("Very Hard", 4, "#ef4444"),
    ],
    LabelCategory.PRODUCT_TYPE: [
        ("Bouquet", 1, "#8b5cf6"),
        ("Vase", 2, "#3b82f6"),
        ("Arrangement", 3, "#10b981"),
        ("Wreath", 4, "#f59e0b"),
        ("Bundle", 5, "#ec4899"),
    ],
}


# =============================================================================
# Analytics
# =============================================================================


class TimeFrame:
    """Analytics window names. The daily/weekly/monthly spellings are aliases."""

    TODAY: Final[str] = "today"
    WEEK: Final[str] = "week"
    MONTH: Final[str] = "month"

    ALL: Final[list[str]] = [TODAY, WEEK, MONTH]
    DEFAULT: Final[str] = WEEK

    ALIASES: Final[dict[str, str]] = {
        "daily": TODAY,
        "weekly": WEEK,
        "monthly": MONTH,
    }


# Store filter value meaning "no restriction"
ALL_STORES: Final[str] = "all"


# =============================================================================
# Validation Constants
# =============================================================================


class Limits:
    """Validation limits."""

    MAX_NAME_LENGTH: Final[int] = 200
    MAX_REMARKS_LENGTH: Final[int] = 2000
    MAX_SEARCH_LENGTH: Final[int] = 200
    MAX_INGEST_BATCH: Final[int] = 5000
