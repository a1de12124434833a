"""
SQLAlchemy ORM Models Package.

- base: Base class and TimestampMixin
- store: Store
- user: User (identity-provider mirror)
- catalog: Product
- label: ProductLabel
- order: Order
"""

# Base classes
from .base import Base, TimestampMixin

# Reference data
from .store import Store
from .user import User

# Catalog and labels
from .catalog import Product
from .label import ProductLabel

# Orders
from .order import Order

__all__ = [
    "Base",
    "TimestampMixin",
    "Store",
    "User",
    "Product",
    "ProductLabel",
    "Order",
]
