"""
Base Repository implementation and the order store gateway interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from shared.utils.exceptions import UnavailableError

if TYPE_CHECKING:
    from florist_api.models import Order, Product


ModelT = TypeVar("ModelT")


@contextmanager
def store_unavailable_guard(operation: str) -> Iterator[None]:
    """
    Translate connectivity failures of the database into UnavailableError.

    Constraint violations and programming errors are not connectivity
    failures and propagate unchanged.
    """
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        raise UnavailableError("order store", operation=operation, error=str(exc.orig)) from exc


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: Return the SQLAlchemy model class
    - _base_query(): Return base query with eager loading
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    @abstractmethod
    def _base_query(self) -> Select:
        """
        Return base query with proper eager loading.
        Subclasses must implement this with selectinload/joinedload.
        """
        ...

    def find_by_id(self, entity_id: str) -> ModelT | None:
        """Find entity by ID."""
        query = self._base_query().where(self.model.id == entity_id)
        with store_unavailable_guard(f"find {self.model.__name__}"):
            return self._db.scalar(query)

    def find_by_ids(self, entity_ids: list[str]) -> Sequence[ModelT]:
        """Find entities by IDs (order not guaranteed)."""
        if not entity_ids:
            return []

        query = self._base_query().where(self.model.id.in_(entity_ids))
        with store_unavailable_guard(f"find {self.model.__name__}"):
            return self._db.execute(query).scalars().unique().all()

    def count(self) -> int:
        """Count all entities."""
        query = select(func.count()).select_from(self.model)
        with store_unavailable_guard(f"count {self.model.__name__}"):
            return self._db.scalar(query) or 0

    def exists(self, entity_id: str) -> bool:
        """Check if entity exists."""
        query = select(func.count()).select_from(self.model).where(self.model.id == entity_id)
        with store_unavailable_guard(f"find {self.model.__name__}"):
            return (self._db.scalar(query) or 0) > 0

    def save(self, entity: ModelT) -> ModelT:
        """Save entity (insert or update) and flush."""
        with store_unavailable_guard(f"save {self.model.__name__}"):
            self._db.add(entity)
            self._db.flush()
            self._db.refresh(entity)
        return entity

    def delete(self, entity: ModelT) -> None:
        """Hard delete entity."""
        with store_unavailable_guard(f"delete {self.model.__name__}"):
            self._db.delete(entity)
            self._db.flush()


# =============================================================================
# Order store gateway
# =============================================================================


@dataclass(frozen=True)
class ExpectedState:
    """Status and version an order must still have for a conditional write."""

    status: str
    version: int


class OrderStoreGateway(ABC):
    """
    Persistence interface consumed by the order workflow, the worklist and
    analytics. Implementations translate connectivity failures into
    UnavailableError.
    """

    @abstractmethod
    def get_order(self, order_id: str) -> "Order | None":
        """Single order with its product loaded, or None."""
        ...

    @abstractmethod
    def fetch_orders(
        self,
        delivery_date: date,
        store_ids: list[str] | None = None,
    ) -> Sequence["Order"]:
        """All orders of a delivery date, optionally for some stores only."""
        ...

    @abstractmethod
    def fetch_products(self, store_ids: list[str] | None = None) -> Sequence["Product"]:
        """Catalog products with their label assignments."""
        ...

    @abstractmethod
    def fetch_completed(
        self,
        start: datetime,
        end: datetime,
        store_ids: list[str] | None = None,
    ) -> Sequence["Order"]:
        """Completed orders with start <= completed_at < end."""
        ...

    @abstractmethod
    def persist_order(
        self,
        order_id: str,
        changes: dict[str, Any],
        expected: ExpectedState | None = None,
    ) -> bool:
        """
        Write changes to one order.

        With expected, the write applies only while the order still has that
        status and version, and bumps the version. Returns whether a row was
        written.
        """
        ...
