"""
Label Model: admin-defined priority labels.
"""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class ProductLabel(TimestampMixin, Base):
    """
    A named, prioritized label in one category (difficulty, productType, custom).

    Lower priority values rank first in the worklist. (category, name) is
    unique so a label name resolves to exactly one priority.
    """

    __tablename__ = "product_label"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    color: Mapped[str] = mapped_column(Text, nullable=False, default="#3b82f6")

    __table_args__ = (
        UniqueConstraint("category", "name", name="uq_product_label_category_name"),
        CheckConstraint("priority >= 0", name="ck_product_label_priority_non_negative"),
        Index("ix_product_label_category_priority", "category", "priority"),
    )

    def __repr__(self) -> str:
        return f"<ProductLabel(id='{self.id}', category='{self.category}', name='{self.name}', priority={self.priority})>"
