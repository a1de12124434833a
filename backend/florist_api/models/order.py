"""
Order Model: one customer order worked on by florists for a delivery date.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import OrderStatus

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .catalog import Product
    from .store import Store


class Order(TimestampMixin, Base):
    """
    A fulfillment order.

    Content fields come from catalog ingestion. Workflow fields (status,
    assigned_florist_id, assigned_at, completed_at, version) are written only
    by the order workflow, always through a conditional update on
    (status, version).

    Invariants:
    - ASSIGNED: assigned_florist_id and assigned_at are set
    - COMPLETED: completed_at is set and completed_at >= assigned_at
    - PENDING: assigned_florist_id, assigned_at and completed_at are null
    """

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    store_id: Mapped[str] = mapped_column(
        Text, ForeignKey("store.id"), nullable=False, index=True
    )
    product_id: Mapped[Optional[str]] = mapped_column(
        Text, ForeignKey("product.id"), nullable=True, index=True
    )
    delivery_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Content
    product_name: Mapped[str] = mapped_column(Text, nullable=False)
    variant: Mapped[Optional[str]] = mapped_column(Text)
    timeslot: Mapped[Optional[str]] = mapped_column(Text)  # e.g. "9:00 AM - 11:00 AM"
    remarks: Mapped[Optional[str]] = mapped_column(Text)
    customizations: Mapped[Optional[str]] = mapped_column(Text)

    # Workflow
    status: Mapped[str] = mapped_column(Text, nullable=False, default=OrderStatus.PENDING)
    assigned_florist_id: Mapped[Optional[str]] = mapped_column(Text)
    assigned_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("ix_orders_date_store", "delivery_date", "store_id"),
        Index("ix_orders_status_completed_at", "status", "completed_at"),
        Index("ix_orders_florist_status", "assigned_florist_id", "status"),
    )

    # Relationships
    store: Mapped["Store"] = relationship(back_populates="orders")
    product: Mapped[Optional["Product"]] = relationship(back_populates="orders")

    @property
    def difficulty_label(self) -> Optional[str]:
        """Difficulty label inherited from the product."""
        return self.product.difficulty_label if self.product else None

    @property
    def product_type_label(self) -> Optional[str]:
        """Product type label inherited from the product."""
        return self.product.product_type_label if self.product else None

    def __repr__(self) -> str:
        return f"<Order(id='{self.id}', status='{self.status}', florist='{self.assigned_florist_id}')>"
