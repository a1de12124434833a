"""
Worklist Domain Service.

Reads a delivery date's orders through the order store and hands them,
with a snapshot of label priorities, to the ranking functions.
"""

from datetime import date

from sqlalchemy.orm import Session

from florist_api.repositories import OrderRepository, OrderStoreGateway
from florist_api.services.domain.label_service import LabelService
from florist_api.services.ranking import WorklistFilters, rank_orders, summarize_worklist
from shared.config.logging import get_logger
from shared.utils.schemas import OrderOutput, WorklistResponse

logger = get_logger(__name__)


class WorklistService:
    """Domain service for the florist worklist."""

    def __init__(self, db: Session, orders: OrderStoreGateway | None = None):
        self._db = db
        self._orders = orders or OrderRepository(db)
        self._labels = LabelService(db)

    def get_worklist(
        self,
        delivery_date: date,
        current_user_id: str,
        filters: WorklistFilters | None = None,
        search_query: str | None = None,
    ) -> WorklistResponse:
        """
        Ranked, filtered orders for delivery_date.

        The summary counts the whole date (store filter applied), not just
        the rows that survive the status, label and search filters.
        """
        filters = filters or WorklistFilters()
        store_ids = sorted(filters.store_ids) if filters.restricts_stores else None

        orders = [
            OrderOutput.model_validate(order)
            for order in self._orders.fetch_orders(delivery_date, store_ids)
        ]
        ranked = rank_orders(
            orders,
            current_user_id,
            filters=filters,
            search_query=search_query,
            priorities=self._labels.priority_table(),
        )

        logger.debug(
            "Worklist ranked",
            delivery_date=delivery_date.isoformat(),
            user_id=current_user_id,
            fetched=len(orders),
            returned=len(ranked),
        )
        return WorklistResponse(
            date=delivery_date,
            orders=ranked,
            summary=summarize_worklist(orders),
        )
