"""
Order Workflow Domain Service.

State machine over an order's fulfillment:

    PENDING --assign_to_self / assign--> ASSIGNED
    ASSIGNED --assign (admin)----------> ASSIGNED   (timer restarts)
    ASSIGNED --unassign (admin)--------> PENDING
    ASSIGNED --complete----------------> COMPLETED  (terminal)

Every transition is a conditional write on the (status, version) that was
read, so of two concurrent claims on one order exactly one succeeds and the
other gets a ConflictError.
"""

from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from florist_api.models import Order
from florist_api.repositories import (
    ExpectedState,
    OrderRepository,
    OrderStoreGateway,
    UserRepository,
    store_unavailable_guard,
)
from florist_api.services.clock import Clock, as_utc, utc_now
from shared.config.constants import ORDER_TRANSITIONS, OrderStatus, Roles
from shared.config.logging import workflow_logger as logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import (
    AssignmentRaceError,
    ClockRegressionError,
    InsufficientRoleError,
    InvalidArgumentError,
    InvalidTransitionError,
    NotFoundError,
    NotOrderHolderError,
    OrderNotFoundError,
)

# Order text an admin may edit; none of them affect the workflow state.
EDITABLE_FIELDS = frozenset({"remarks", "customizations"})


class OrderWorkflowService:
    """
    Domain service for order assignment and completion.

    The clock is injected so tests can pin "now"; the order store is
    injected so the state machine can run against any gateway.
    """

    def __init__(
        self,
        db: Session,
        clock: Clock = utc_now,
        orders: OrderStoreGateway | None = None,
    ):
        self._db = db
        self._clock = clock
        self._orders = orders or OrderRepository(db)
        self._users = UserRepository(db)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def assign_to_self(self, order_id: str, florist_id: str) -> Order:
        """
        A florist claims an unassigned order.

        Raises:
            OrderNotFoundError: unknown order
            InvalidTransitionError: order is not PENDING
            AssignmentRaceError: another claim won between read and write
        """
        order = self._load(order_id)
        if order.status != OrderStatus.PENDING:
            raise InvalidTransitionError(
                order.id, order.status, OrderStatus.ASSIGNED, florist_id=florist_id
            )

        return self._transition(
            order,
            OrderStatus.ASSIGNED,
            {
                "assigned_florist_id": florist_id,
                "assigned_at": self._now(),
                "completed_at": None,
            },
            event="Order self-assigned",
            florist_id=florist_id,
        )

    def assign(self, order_id: str, florist_id: str, actor_role: str) -> Order:
        """
        Admin assigns (or reassigns) an order to a florist.

        Reassigning restarts the completion timer, also when the florist is
        unchanged.

        Raises:
            InsufficientRoleError: caller is not an admin
            NotFoundError: unknown order or florist
            InvalidTransitionError: order is COMPLETED
            AssignmentRaceError: the order changed between read and write
        """
        self._require_admin(actor_role, "assign")
        order = self._load(order_id)

        florist = self._users.find_by_id(florist_id)
        if florist is None or not florist.is_florist:
            raise NotFoundError("Florist", florist_id, order_id=order_id)

        previous_florist = order.assigned_florist_id
        return self._transition(
            order,
            OrderStatus.ASSIGNED,
            {
                "assigned_florist_id": florist_id,
                "assigned_at": self._now(),
                "completed_at": None,
            },
            event="Order reassigned" if order.status == OrderStatus.ASSIGNED else "Order assigned",
            florist_id=florist_id,
            previous_florist_id=previous_florist,
        )

    def unassign(self, order_id: str, actor_role: str) -> Order:
        """
        Admin returns an assigned order to the pool.

        Raises:
            InsufficientRoleError: caller is not an admin
            OrderNotFoundError: unknown order
            InvalidTransitionError: order is PENDING or COMPLETED
        """
        self._require_admin(actor_role, "unassign")
        order = self._load(order_id)

        previous_florist = order.assigned_florist_id
        return self._transition(
            order,
            OrderStatus.PENDING,
            {
                "assigned_florist_id": None,
                "assigned_at": None,
                "completed_at": None,
            },
            event="Order unassigned",
            previous_florist_id=previous_florist,
        )

    def complete(self, order_id: str, florist_id: str, actor_role: str) -> Order:
        """
        The assigned florist (or an admin) marks an order done.

        Raises:
            OrderNotFoundError: unknown order
            InvalidTransitionError: order is not ASSIGNED
            NotOrderHolderError: a florist completing someone else's order
            ClockRegressionError: completion would precede assignment
            AssignmentRaceError: the order changed between read and write
        """
        if actor_role not in Roles.ALL:
            raise InsufficientRoleError(Roles.ALL, actor_role=actor_role)

        order = self._load(order_id)
        if order.status != OrderStatus.ASSIGNED:
            raise InvalidTransitionError(order.id, order.status, OrderStatus.COMPLETED)

        if actor_role != Roles.ADMIN and order.assigned_florist_id != florist_id:
            raise NotOrderHolderError(order.id, florist_id=florist_id)

        now = self._now()
        assigned_at = as_utc(order.assigned_at)
        if assigned_at is not None and now < assigned_at:
            raise ClockRegressionError(order.id, assigned_at=assigned_at, completed_at=now)

        return self._transition(
            order,
            OrderStatus.COMPLETED,
            {"completed_at": now},
            event="Order completed",
            florist_id=order.assigned_florist_id,
            completed_by=florist_id,
        )

    # -------------------------------------------------------------------------
    # Admin edits
    # -------------------------------------------------------------------------

    def update_remarks(self, order_id: str, text: str | None, actor_role: str) -> Order:
        """Replace the remarks. Status and version are untouched."""
        return self.update_details(order_id, {"remarks": text}, actor_role)

    def update_customizations(self, order_id: str, text: str | None, actor_role: str) -> Order:
        """Replace the customizations. Status and version are untouched."""
        return self.update_details(order_id, {"customizations": text}, actor_role)

    def update_details(self, order_id: str, changes: dict[str, str | None], actor_role: str) -> Order:
        """
        Replace remarks and/or customizations in one write.

        Raises:
            InsufficientRoleError: caller is not an admin
            InvalidArgumentError: no field, or a field other than remarks and customizations
            OrderNotFoundError: unknown order
        """
        self._require_admin(actor_role, "edit order")
        fields = sorted(changes)
        if not fields or not set(fields) <= EDITABLE_FIELDS:
            raise InvalidArgumentError(
                "Only remarks and customizations can be edited", order_id=order_id, fields=fields
            )
        self._load(order_id)

        if not self._orders.persist_order(order_id, dict(changes)):
            self._rollback()
            raise OrderNotFoundError(order_id)
        self._commit("update order")

        logger.info("Order updated", order_id=order_id, fields=fields)
        return self._load(order_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _transition(
        self,
        order: Order,
        to_status: str,
        changes: dict[str, Any],
        event: str,
        **log_context: Any,
    ) -> Order:
        if to_status not in ORDER_TRANSITIONS.get(order.status, []):
            raise InvalidTransitionError(order.id, order.status, to_status, **log_context)

        expected = ExpectedState(status=order.status, version=order.version)
        written = self._orders.persist_order(
            order.id,
            {"status": to_status, **changes},
            expected=expected,
        )
        if not written:
            self._rollback()
            raise AssignmentRaceError(
                order.id,
                expected_status=expected.status,
                expected_version=expected.version,
                **log_context,
            )
        self._commit("order transition")

        logger.info(
            event,
            order_id=order.id,
            from_status=expected.status,
            status=to_status,
            version=expected.version + 1,
            **log_context,
        )
        return self._load(order.id)

    def _load(self, order_id: str) -> Order:
        order = self._orders.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def _now(self) -> datetime:
        return as_utc(self._clock())

    def _require_admin(self, actor_role: str, action: str) -> None:
        if actor_role != Roles.ADMIN:
            raise InsufficientRoleError([Roles.ADMIN], operation=action, actor_role=actor_role)

    def _commit(self, operation: str) -> None:
        with store_unavailable_guard(operation):
            safe_commit(self._db)

    def _rollback(self) -> None:
        with store_unavailable_guard("rollback"):
            self._db.rollback()
