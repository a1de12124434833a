"""
Order Ingestion Domain Service.

Loads normalized catalog orders for a delivery date. Re-ingesting an order
refreshes its content and date but never its workflow state.
"""

from dataclasses import replace
from datetime import date
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from florist_api.models import Product
from florist_api.repositories import OrderRecord, OrderRepository, store_unavailable_guard
from shared.config.logging import florist_api_logger as logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import InvalidArgumentError


class OrderIngestionService:
    """Domain service for catalog order ingestion."""

    def __init__(self, db: Session):
        self._db = db
        self._orders = OrderRepository(db)

    def ingest(self, delivery_date: date, records: Sequence[OrderRecord]) -> tuple[int, int]:
        """
        Upsert a batch of orders for one delivery date.

        Returns (created, updated). The batch is all-or-nothing.

        Raises:
            InvalidArgumentError: unknown store or product, duplicate ids in the batch
        """
        ids = [record.id for record in records]
        duplicates = sorted({order_id for order_id in ids if ids.count(order_id) > 1})
        if duplicates:
            raise InvalidArgumentError(
                f"Duplicate order ids in batch: {', '.join(duplicates)}", order_ids=duplicates
            )

        unknown_stores = sorted({r.store_id for r in records} - self._orders.known_store_ids())
        if unknown_stores:
            raise InvalidArgumentError(
                f"Unknown stores: {', '.join(unknown_stores)}", store_ids=unknown_stores
            )

        product_ids = {r.product_id for r in records if r.product_id}
        if product_ids:
            with store_unavailable_guard("find products"):
                found = set(
                    self._db.execute(select(Product.id).where(Product.id.in_(product_ids))).scalars()
                )
            missing = sorted(product_ids - found)
            if missing:
                raise InvalidArgumentError(
                    f"Unknown products: {', '.join(missing)}", product_ids=missing
                )

        created = updated = 0
        try:
            for record in records:
                _, is_new = self._orders.upsert_order(replace(record, delivery_date=delivery_date))
                if is_new:
                    created += 1
                else:
                    updated += 1
            with store_unavailable_guard("ingest orders"):
                safe_commit(self._db)
        except Exception:
            self._db.rollback()
            raise

        logger.info(
            "Orders ingested",
            delivery_date=delivery_date.isoformat(),
            created=created,
            updated=updated,
        )
        return created, updated
