"""
Centralized HTTP exceptions for consistent error handling.

Domain services raise these directly; FastAPI renders them as JSON
responses with the matching status code.

Usage:
    from shared.utils.exceptions import NotFoundError, ForbiddenError, ConflictError

    raise NotFoundError("Order", order_id)
    raise ForbiddenError("unassign orders")
    raise ConflictError("Order o-1 is already completed")
"""

from fastapi import HTTPException, status
from typing import Any

from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Order", "o-123")
        raise NotFoundError("Label", label_id, category="difficulty")
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} with ID {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


class OrderNotFoundError(NotFoundError):
    """Order not found."""

    def __init__(self, order_id: str | None = None, **log_context: Any):
        super().__init__("Order", order_id, **log_context)


class LabelNotFoundError(NotFoundError):
    """Product label not found."""

    def __init__(self, label_id: str | None = None, **log_context: Any):
        super().__init__("Label", label_id, **log_context)


class UserNotFoundError(NotFoundError):
    """Florist or admin not found in the roster."""

    def __init__(self, user_id: str | None = None, **log_context: Any):
        super().__init__("User", user_id, **log_context)


class ProductNotFoundError(NotFoundError):
    """Catalog product not found."""

    def __init__(self, product_id: str | None = None, **log_context: Any):
        super().__init__("Product", product_id, **log_context)


# =============================================================================
# 403 Forbidden Errors
# =============================================================================


class ForbiddenError(AppException):
    """
    Authorization/permission error (403).

    Usage:
        raise ForbiddenError("unassign orders")
        raise ForbiddenError("complete this order", user_id=user_id)
    """

    def __init__(self, action: str | None = None, **log_context: Any):
        if action:
            detail = f"Not authorized to {action}"
        else:
            detail = "Access denied"

        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            log_level="warning",
            action=action,
            **log_context,
        )


class InsufficientRoleError(ForbiddenError):
    """User doesn't have the required role."""

    def __init__(self, required_roles: list[str], **log_context: Any):
        roles_str = ", ".join(required_roles)
        super().__init__(
            f"perform this action (requires role: {roles_str})",
            required_roles=required_roles,
            **log_context,
        )


class NotOrderHolderError(ForbiddenError):
    """A florist tried to act on an order assigned to someone else."""

    def __init__(self, order_id: str, **log_context: Any):
        super().__init__("act on an order assigned to another florist", order_id=order_id, **log_context)


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class InvalidArgumentError(AppException):
    """
    Input validation error (400).

    Usage:
        raise InvalidArgumentError("Priority must be a non-negative integer")
        raise InvalidArgumentError("Unknown category", field="category", value="size")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            log_level="warning",
            **log_context,
        )


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class ConflictError(AppException):
    """
    Resource conflict error (409).

    Usage:
        raise ConflictError("Order o-1 is already assigned")
    """

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            log_level="warning",
            **log_context,
        )


class InvalidTransitionError(ConflictError):
    """The order's current status does not allow the requested transition."""

    def __init__(self, order_id: str, from_status: str, to_status: str, **log_context: Any):
        detail = f"Order {order_id} cannot move from '{from_status}' to '{to_status}'"
        super().__init__(
            detail,
            order_id=order_id,
            from_status=from_status,
            to_status=to_status,
            **log_context,
        )


class AssignmentRaceError(ConflictError):
    """The order changed between read and write; another request won."""

    def __init__(self, order_id: str, **log_context: Any):
        super().__init__(
            f"Order {order_id} was modified concurrently, reload and retry",
            order_id=order_id,
            **log_context,
        )


class ClockRegressionError(ConflictError):
    """Completion time would precede assignment time."""

    def __init__(self, order_id: str, **log_context: Any):
        super().__init__(
            f"Order {order_id} cannot complete before it was assigned",
            order_id=order_id,
            **log_context,
        )


class DuplicateLabelError(ConflictError):
    """A label with the same category and name already exists."""

    def __init__(self, category: str, name: str, **log_context: Any):
        super().__init__(
            f"Label '{name}' already exists in category '{category}'",
            category=category,
            name=name,
            **log_context,
        )


# =============================================================================
# 5xx Server Errors
# =============================================================================


class InternalError(AppException):
    """Internal server error (500)."""

    def __init__(self, detail: str = "Internal server error", **log_context: Any):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            log_level="error",
            **log_context,
        )


class UnavailableError(AppException):
    """
    Order store unreachable (503).

    Usage:
        raise UnavailableError("order store", operation="fetch_orders")
    """

    def __init__(
        self,
        service: str = "order store",
        retry_after: int | None = None,
        **log_context: Any,
    ):
        headers = None
        if retry_after:
            headers = {"Retry-After": str(retry_after)}

        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Service {service} temporarily unavailable",
            log_level="error",
            headers=headers,
            service=service,
            **log_context,
        )
