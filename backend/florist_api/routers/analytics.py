"""
Analytics router.
Per-florist completion stats over a calendar window.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from florist_api.core.dependencies import get_clock, store_filter
from florist_api.services.clock import Clock
from florist_api.services.domain import AnalyticsService
from shared.config.constants import ALL_STAFF_ROLES, TimeFrame
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context, require_roles
from shared.utils.schemas import AnalyticsResponse, FloristStatsOutput, StoreBreakdownOutput


router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsResponse)
def get_florist_stats(
    timeframe: str = Query(
        default=TimeFrame.DEFAULT,
        description="today, week or month (daily, weekly, monthly also accepted)",
    ),
    stores: list[str] = Depends(store_filter),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> AnalyticsResponse:
    """
    Completed count and average completion minutes per florist.

    Florists without completions in the window are listed with a count of
    zero and no average.
    """
    require_roles(ctx, list(ALL_STAFF_ROLES))

    service = AnalyticsService(db, clock=clock)
    window, stats = service.florist_stats(timeframe, stores or None)

    return AnalyticsResponse(
        timeframe=window.timeframe,
        timezone=service.timezone_name,
        start=window.start,
        end=window.end,
        stats=[
            FloristStatsOutput(
                florist_id=s.florist_id,
                florist_name=s.florist_name,
                completed_count=s.completed_count,
                average_completion_minutes=s.average_completion_minutes,
                store_breakdown=[
                    StoreBreakdownOutput(
                        store_id=b.store_id,
                        completed_count=b.completed_count,
                        average_completion_minutes=b.average_completion_minutes,
                    )
                    for b in s.store_breakdown
                ],
            )
            for s in stats
        ],
    )
