"""
Repository Pattern implementation.
Centralizes data access with guaranteed eager loading.

Usage:
    from florist_api.repositories import get_order_repository

    repo = get_order_repository(db)
    orders = repo.fetch_orders(date(2025, 3, 14), store_ids=["windflower"])
    order = repo.get_order("o-1001")
"""

from .base import BaseRepository, ExpectedState, OrderStoreGateway, store_unavailable_guard
from .order import OrderRepository, OrderRecord, get_order_repository
from .label import LabelRepository, get_label_repository
from .user import UserRepository, get_user_repository

__all__ = [
    # Base
    "BaseRepository",
    "ExpectedState",
    "OrderStoreGateway",
    "store_unavailable_guard",
    # Order
    "OrderRepository",
    "OrderRecord",
    "get_order_repository",
    # Label
    "LabelRepository",
    "get_label_repository",
    # User
    "UserRepository",
    "get_user_repository",
]
