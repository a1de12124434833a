"""
Catalog Model: Product.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .order import Order
    from .store import Store


class Product(TimestampMixin, Base):
    """
    A catalog product of one store.

    Orders inherit their difficulty and product type labels from their
    product. Labels are stored by name and resolved against the label
    registry at read time, so a name with no registry entry simply sorts last.
    """

    __tablename__ = "product"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    store_id: Mapped[str] = mapped_column(
        Text, ForeignKey("store.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    variant: Mapped[Optional[str]] = mapped_column(Text)
    difficulty_label: Mapped[Optional[str]] = mapped_column(Text)
    product_type_label: Mapped[Optional[str]] = mapped_column(Text)
    shopify_id: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        Index("ix_product_difficulty_label", "difficulty_label"),
        Index("ix_product_type_label", "product_type_label"),
    )

    # Relationships
    store: Mapped["Store"] = relationship(back_populates="products")
    orders: Mapped[list["Order"]] = relationship(back_populates="product")

    def __repr__(self) -> str:
        return f"<Product(id='{self.id}', name='{self.name}', store_id='{self.store_id}')>"
