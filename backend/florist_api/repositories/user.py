"""
User Repository - Read access to the florist roster.
"""

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from florist_api.models import User
from shared.config.constants import Roles
from .base import BaseRepository, store_unavailable_guard


class UserRepository(BaseRepository[User]):
    """Repository for User entities (identity-provider mirror)."""

    @property
    def model(self) -> type[User]:
        return User

    def _base_query(self) -> Select:
        return select(User).order_by(User.id)

    def find_florists(self) -> Sequence[User]:
        """All florists, ordered by id."""
        query = self._base_query().where(User.role == Roles.FLORIST)
        with store_unavailable_guard("find florists"):
            return self._db.execute(query).scalars().all()


def get_user_repository(db: Session) -> UserRepository:
    """Factory function for UserRepository."""
    return UserRepository(db)
