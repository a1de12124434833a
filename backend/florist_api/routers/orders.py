"""
Orders router.
Worklist reads and the assignment workflow for florists and admins.
"""

from datetime import date
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from florist_api.core.dependencies import get_clock, operating_today, store_filter
from florist_api.repositories import OrderRecord, get_order_repository
from florist_api.services.clock import Clock
from florist_api.services.domain import (
    OrderIngestionService,
    OrderWorkflowService,
    WorklistService,
)
from florist_api.services.ranking import WorklistFilters, summarize_worklist
from shared.config.constants import ALL_STAFF_ROLES, Limits, MANAGEMENT_ROLES, Roles
from shared.config.logging import florist_api_logger as logger
from shared.infrastructure.db import get_db
from shared.security.auth import actor_role, current_user_context, require_roles
from shared.utils.exceptions import InvalidArgumentError, OrderNotFoundError
from shared.utils.schemas import (
    AssignOrderRequest,
    IngestRequest,
    IngestResponse,
    OrderOutput,
    StatusFilterLiteral,
    UpdateOrderRequest,
    WorklistResponse,
    WorklistSummary,
)


router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=WorklistResponse)
def get_worklist(
    delivery_date: date | None = Query(default=None, alias="date"),
    stores: list[str] = Depends(store_filter),
    status: StatusFilterLiteral = Query(default="ALL"),
    difficulty: str | None = Query(default=None),
    product_type: str | None = Query(default=None, alias="productType"),
    q: str | None = Query(default=None, max_length=Limits.MAX_SEARCH_LENGTH),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> WorklistResponse:
    """
    Ranked worklist for a delivery date (default: today in the operating zone).

    Orders assigned to the caller come first, then unassigned ones, then
    orders held by other florists; within each group by timeslot, product
    name, difficulty and product type priority.
    """
    require_roles(ctx, list(ALL_STAFF_ROLES))

    filters = WorklistFilters(
        status=status,
        store_ids=frozenset(stores),
        difficulty=difficulty or None,
        product_type=product_type or None,
    )
    return WorklistService(db).get_worklist(
        delivery_date or operating_today(clock),
        ctx["sub"],
        filters=filters,
        search_query=q,
    )


@router.get("/summary", response_model=WorklistSummary)
def get_worklist_summary(
    delivery_date: date | None = Query(default=None, alias="date"),
    stores: list[str] = Depends(store_filter),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> WorklistSummary:
    """Total, pending, assigned and completed counts for a delivery date."""
    require_roles(ctx, list(ALL_STAFF_ROLES))

    orders = get_order_repository(db).fetch_orders(
        delivery_date or operating_today(clock), stores or None
    )
    return summarize_worklist(orders)


@router.get("/{order_id}", response_model=OrderOutput)
def get_order(
    order_id: str,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> OrderOutput:
    require_roles(ctx, list(ALL_STAFF_ROLES))

    order = get_order_repository(db).get_order(order_id)
    if order is None:
        raise OrderNotFoundError(order_id)
    return OrderOutput.model_validate(order)


@router.patch("/{order_id}/assign", response_model=OrderOutput)
def assign_order(
    order_id: str,
    body: AssignOrderRequest | None = Body(default=None),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> OrderOutput:
    """
    Assign an order.

    - Florist, no floristId (or their own): claim an unassigned order
    - Admin with floristId: assign or reassign to that florist
    """
    role = actor_role(ctx)
    caller_id = ctx["sub"]
    florist_id = body.florist_id if body else None
    service = OrderWorkflowService(db, clock=clock)

    if role == Roles.FLORIST and florist_id in (None, caller_id):
        order = service.assign_to_self(order_id, caller_id)
    elif role == Roles.ADMIN and not florist_id:
        raise InvalidArgumentError("floristId is required when an admin assigns an order", order_id=order_id)
    else:
        order = service.assign(order_id, florist_id, role)

    return OrderOutput.model_validate(order)


@router.patch("/{order_id}/complete", response_model=OrderOutput)
def complete_order(
    order_id: str,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> OrderOutput:
    """Mark an assigned order completed (assigned florist or admin)."""
    order = OrderWorkflowService(db, clock=clock).complete(order_id, ctx["sub"], actor_role(ctx))
    return OrderOutput.model_validate(order)


@router.patch("/{order_id}/unassign", response_model=OrderOutput)
def unassign_order(
    order_id: str,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> OrderOutput:
    """Return an assigned order to the unassigned pool (admin only)."""
    order = OrderWorkflowService(db, clock=clock).unassign(order_id, actor_role(ctx))
    return OrderOutput.model_validate(order)


@router.patch("/{order_id}", response_model=OrderOutput)
def update_order(
    order_id: str,
    body: UpdateOrderRequest,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> OrderOutput:
    """Edit remarks and/or customizations (admin only). Omitted fields stay as they are."""
    role = actor_role(ctx)
    fields = body.model_fields_set & {"remarks", "customizations"}
    if not fields:
        raise InvalidArgumentError("Nothing to update: send remarks and/or customizations", order_id=order_id)

    changes = {name: getattr(body, name) for name in fields}
    order = OrderWorkflowService(db).update_details(order_id, changes, role)
    return OrderOutput.model_validate(order)


@router.post("/ingest", response_model=IngestResponse)
def ingest_orders(
    body: IngestRequest,
    db: Session = Depends(get_db),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> IngestResponse:
    """Upsert catalog orders for a delivery date (admin only)."""
    require_roles(ctx, list(MANAGEMENT_ROLES))

    records = [
        OrderRecord(
            id=item.id,
            store_id=item.store_id,
            delivery_date=body.date,
            product_name=item.product_name,
            product_id=item.product_id,
            variant=item.variant,
            timeslot=item.timeslot,
            remarks=item.remarks,
            customizations=item.customizations,
        )
        for item in body.orders
    ]
    created, updated = OrderIngestionService(db).ingest(body.date, records)
    logger.info("Ingestion request handled", user_id=ctx["sub"], created=created, updated=updated)
    return IngestResponse(created=created, updated=updated)
