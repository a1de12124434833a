"""
Analytics Domain Service.

Resolves the calendar window, reads completed orders and the florist roster,
and aggregates them into per-florist stats.
"""

from sqlalchemy.orm import Session

from florist_api.repositories import OrderRepository, OrderStoreGateway, UserRepository
from florist_api.services.analytics import FloristStats, TimeWindow, compute_stats, resolve_window
from florist_api.services.clock import Clock, operating_zone, utc_now
from shared.config.constants import ALL_STORES
from shared.config.logging import analytics_logger as logger


class AnalyticsService:
    """Domain service for florist performance stats."""

    def __init__(
        self,
        db: Session,
        clock: Clock = utc_now,
        orders: OrderStoreGateway | None = None,
        timezone_name: str | None = None,
    ):
        self._db = db
        self._clock = clock
        self._orders = orders or OrderRepository(db)
        self._users = UserRepository(db)
        self._zone = operating_zone(timezone_name)

    @property
    def timezone_name(self) -> str:
        return self._zone.key

    def window_for(self, timeframe: str | None) -> TimeWindow:
        return resolve_window(timeframe, self._clock(), self._zone)

    def florist_stats(
        self,
        timeframe: str | None,
        store_ids: list[str] | None = None,
    ) -> tuple[TimeWindow, list[FloristStats]]:
        window = self.window_for(timeframe)
        stores = None
        if store_ids and ALL_STORES not in store_ids:
            stores = store_ids

        completed = self._orders.fetch_completed(window.start, window.end, stores)
        stats = compute_stats(
            completed,
            window,
            store_ids=stores,
            florists=self._users.find_florists(),
        )

        logger.info(
            "Florist stats computed",
            timeframe=window.timeframe,
            start=window.start.isoformat(),
            end=window.end.isoformat(),
            completed=len(completed),
            florists=len(stats),
        )
        return window, stats
