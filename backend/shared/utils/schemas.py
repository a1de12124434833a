"""
Shared Pydantic schemas used across the application.
"""

from datetime import date, datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator

from shared.config.constants import Limits


# =============================================================================
# Common Types
# =============================================================================

Role = Literal["ADMIN", "FLORIST"]
OrderStatusLiteral = Literal["PENDING", "ASSIGNED", "COMPLETED"]
StatusFilterLiteral = Literal["ALL", "PENDING", "ASSIGNED", "COMPLETED"]


class ErrorResponse(BaseModel):
    """Standard error body produced by AppException."""

    detail: str


# =============================================================================
# Orders
# =============================================================================


class OrderOutput(BaseModel):
    """An order as seen by the worklist, with labels inherited from its product."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    store_id: str
    product_id: str | None = None
    delivery_date: date
    product_name: str
    variant: str | None = None
    timeslot: str | None = None
    remarks: str | None = None
    customizations: str | None = None
    difficulty_label: str | None = None
    product_type_label: str | None = None
    status: OrderStatusLiteral
    assigned_florist_id: str | None = None
    assigned_at: datetime | None = None
    completed_at: datetime | None = None
    version: int = 0

    @field_validator("assigned_at", "completed_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # SQLite hands back naive values; they are UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class WorklistSummary(BaseModel):
    """Counts shown above the worklist."""

    total: int = 0
    pending: int = 0
    assigned: int = 0
    completed: int = 0


class WorklistResponse(BaseModel):
    """Ranked worklist for one delivery date."""

    date: date
    orders: list[OrderOutput]
    summary: WorklistSummary


class AssignOrderRequest(BaseModel):
    """
    Assignment body. Without florist_id (or with the caller's own id) a
    florist claims the order; an admin names the florist to assign.
    """

    model_config = ConfigDict(populate_by_name=True)

    florist_id: str | None = Field(default=None, alias="floristId", max_length=Limits.MAX_NAME_LENGTH)


class UpdateOrderRequest(BaseModel):
    """Admin edit of free-text order fields. Omitted fields are left unchanged."""

    remarks: str | None = Field(default=None, max_length=Limits.MAX_REMARKS_LENGTH)
    customizations: str | None = Field(default=None, max_length=Limits.MAX_REMARKS_LENGTH)


class IngestOrderInput(BaseModel):
    """One normalized catalog order."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    store_id: str = Field(alias="storeId", min_length=1)
    product_id: str | None = Field(default=None, alias="productId")
    product_name: str = Field(alias="productName", min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    variant: str | None = Field(default=None, alias="productVariant")
    timeslot: str | None = None
    remarks: str | None = Field(default=None, max_length=Limits.MAX_REMARKS_LENGTH)
    customizations: str | None = Field(
        default=None, alias="productCustomizations", max_length=Limits.MAX_REMARKS_LENGTH
    )


class IngestRequest(BaseModel):
    """Catalog ingestion batch for one delivery date."""

    date: date
    orders: list[IngestOrderInput] = Field(max_length=Limits.MAX_INGEST_BATCH)


class IngestResponse(BaseModel):
    created: int
    updated: int


# =============================================================================
# Labels and products
# =============================================================================


class LabelInput(BaseModel):
    """Create or replace a label. Priority is validated by the label service."""

    id: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    name: str = Field(max_length=Limits.MAX_NAME_LENGTH)
    category: str
    priority: StrictInt | StrictFloat
    color: str = Field(default="#3b82f6", pattern=r"^#[0-9A-Fa-f]{6}$")  # Hex color


class LabelOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    priority: int
    color: str


class ProductOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    store_id: str
    name: str
    variant: str | None = None
    difficulty_label: str | None = None
    product_type_label: str | None = None


class ProductLabelsUpdate(BaseModel):
    """Label names to set on a product. Null clears the label."""

    model_config = ConfigDict(populate_by_name=True)

    difficulty_label: str | None = Field(default=None, alias="difficultyLabel")
    product_type_label: str | None = Field(default=None, alias="productTypeLabel")


# =============================================================================
# Analytics
# =============================================================================


class StoreBreakdownOutput(BaseModel):
    store_id: str
    completed_count: int
    average_completion_minutes: int | None = None


class FloristStatsOutput(BaseModel):
    florist_id: str
    florist_name: str | None = None
    completed_count: int
    average_completion_minutes: int | None = None
    store_breakdown: list[StoreBreakdownOutput] = []


class AnalyticsResponse(BaseModel):
    timeframe: str
    timezone: str
    start: datetime
    end: datetime
    stats: list[FloristStatsOutput]
