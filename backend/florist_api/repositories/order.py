"""
Order Repository - SQLAlchemy implementation of the order store gateway.
Eager loading of the product keeps label lookups free of N+1 queries.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Sequence

from sqlalchemy import Select, select, update
from sqlalchemy.orm import Session, joinedload

from florist_api.models import Order, Product, Store
from shared.config.constants import OrderStatus
from .base import BaseRepository, ExpectedState, OrderStoreGateway, store_unavailable_guard


# Fields catalog ingestion may write; workflow fields are never among them.
INGESTED_FIELDS = (
    "store_id",
    "product_id",
    "delivery_date",
    "product_name",
    "variant",
    "timeslot",
)

# Admin-editable notes: taken from the catalog only when the order is created.
CREATE_ONLY_FIELDS = (
    "remarks",
    "customizations",
)


@dataclass
class OrderRecord:
    """Normalized catalog order as delivered by ingestion."""

    id: str
    store_id: str
    delivery_date: date
    product_name: str
    product_id: str | None = None
    variant: str | None = None
    timeslot: str | None = None
    remarks: str | None = None
    customizations: str | None = None


def _utc(value: datetime) -> datetime:
    # Window bounds may be zone-aware in any zone; the column stores UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _store_filter(store_ids: list[str] | None) -> list[str] | None:
    if not store_ids:
        return None
    return list(store_ids)


class OrderRepository(BaseRepository[Order], OrderStoreGateway):
    """
    Repository for Order entities.

    Guarantees eager loading of:
    - product (for inherited labels)
    """

    @property
    def model(self) -> type[Order]:
        return Order

    def _base_query(self) -> Select:
        return select(Order).options(joinedload(Order.product))

    # -------------------------------------------------------------------------
    # Gateway reads
    # -------------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order | None:
        query = (
            self._base_query()
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        with store_unavailable_guard("get_order"):
            return self._db.scalar(query)

    def fetch_orders(
        self,
        delivery_date: date,
        store_ids: list[str] | None = None,
    ) -> Sequence[Order]:
        query = self._base_query().where(Order.delivery_date == delivery_date)
        stores = _store_filter(store_ids)
        if stores:
            query = query.where(Order.store_id.in_(stores))
        # Ingestion order is the stable input order of the worklist
        query = query.order_by(Order.created_at, Order.id)

        with store_unavailable_guard("fetch_orders"):
            return self._db.execute(query).scalars().unique().all()

    def fetch_products(self, store_ids: list[str] | None = None) -> Sequence[Product]:
        query = select(Product).order_by(Product.store_id, Product.name, Product.id)
        stores = _store_filter(store_ids)
        if stores:
            query = query.where(Product.store_id.in_(stores))

        with store_unavailable_guard("fetch_products"):
            return self._db.execute(query).scalars().all()

    def fetch_completed(
        self,
        start: datetime,
        end: datetime,
        store_ids: list[str] | None = None,
    ) -> Sequence[Order]:
        query = self._base_query().where(
            Order.status == OrderStatus.COMPLETED,
            Order.completed_at >= _utc(start),
            Order.completed_at < _utc(end),
        )
        stores = _store_filter(store_ids)
        if stores:
            query = query.where(Order.store_id.in_(stores))
        query = query.order_by(Order.completed_at, Order.id)

        with store_unavailable_guard("fetch_completed"):
            return self._db.execute(query).scalars().unique().all()

    # -------------------------------------------------------------------------
    # Gateway writes
    # -------------------------------------------------------------------------

    def persist_order(
        self,
        order_id: str,
        changes: dict[str, Any],
        expected: ExpectedState | None = None,
    ) -> bool:
        stmt = update(Order).where(Order.id == order_id)
        values = dict(changes)
        if expected is not None:
            stmt = stmt.where(
                Order.status == expected.status,
                Order.version == expected.version,
            )
            values["version"] = expected.version + 1
        stmt = stmt.values(**values).execution_options(synchronize_session=False)

        with store_unavailable_guard("persist_order"):
            result = self._db.execute(stmt)
        return result.rowcount == 1

    def upsert_order(self, record: OrderRecord) -> tuple[Order, bool]:
        """
        Insert a new order or refresh the content of an existing one.

        Returns (order, created). Workflow fields, remarks and customizations
        of an existing order are left as they are.
        """
        with store_unavailable_guard("upsert_order"):
            existing = self._db.get(Order, record.id)
            if existing is None:
                order = Order(
                    **{name: getattr(record, name) for name in INGESTED_FIELDS + CREATE_ONLY_FIELDS},
                    id=record.id,
                    status=OrderStatus.PENDING,
                    version=0,
                )
                self._db.add(order)
                self._db.flush()
                return order, True

            for name in INGESTED_FIELDS:
                setattr(existing, name, getattr(record, name))
            self._db.flush()
            return existing, False

    def known_store_ids(self) -> set[str]:
        with store_unavailable_guard("known_store_ids"):
            return set(self._db.execute(select(Store.id)).scalars().all())


def get_order_repository(db: Session) -> OrderRepository:
    """Factory function for OrderRepository."""
    return OrderRepository(db)
