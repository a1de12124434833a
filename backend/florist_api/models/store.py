"""
Store Model: the retail storefronts orders are fulfilled for.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .catalog import Product
    from .order import Order


class Store(TimestampMixin, Base):
    """
    A retail storefront. Reference data synchronized from the catalog source;
    the core only reads it.
    """

    __tablename__ = "store"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    domain: Mapped[Optional[str]] = mapped_column(Text)
    color: Mapped[str] = mapped_column(Text, default="#ec4899")

    # Relationships
    products: Mapped[list["Product"]] = relationship(back_populates="store")
    orders: Mapped[list["Order"]] = relationship(back_populates="store")

    def __repr__(self) -> str:
        return f"<Store(id='{self.id}', name='{self.name}')>"
