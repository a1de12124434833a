"""
User Model: mirror of identity-provider accounts.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.config.constants import Roles

from .base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """
    A florist or administrator as known to the identity provider.

    Read-only for the core: used as the florist roster for analytics and to
    validate directed assignments.
    """

    __tablename__ = "app_user"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(Text)
    role: Mapped[str] = mapped_column(Text, nullable=False, default=Roles.FLORIST)

    __table_args__ = (
        Index("ix_app_user_role", "role"),
    )

    @property
    def is_florist(self) -> bool:
        return self.role == Roles.FLORIST

    def __repr__(self) -> str:
        return f"<User(id='{self.id}', name='{self.name}', role='{self.role}')>"
