"""
Utilities module: Exceptions, schemas.
"""

from shared.utils.exceptions import (
    NotFoundError,
    ForbiddenError,
    InvalidArgumentError,
    ConflictError,
    UnavailableError,
)
from shared.utils.schemas import ErrorResponse

__all__ = [
    # exceptions
    "NotFoundError",
    "ForbiddenError",
    "InvalidArgumentError",
    "ConflictError",
    "UnavailableError",
    # schemas
    "ErrorResponse",
]
