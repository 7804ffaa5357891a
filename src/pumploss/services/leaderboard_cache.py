"""Staleness-bounded cache in front of the leaderboard aggregator."""

import logging
from typing import Callable, Optional

from pumploss.core.exceptions import WriteConflictError
from pumploss.core.timezone import now_epoch_seconds
from pumploss.domain.models import LeaderboardCacheRecord, LeaderboardPeriod
from pumploss.domain.views import LeaderboardEntry
from pumploss.repositories.protocols import UnitOfWork
from pumploss.services.leaderboard_aggregator import LeaderboardAggregator

logger = logging.getLogger(__name__)


class LeaderboardCache:
    """
    Serve leaderboards from the cache while fresh, recompute otherwise.

    Records are per period and independent. A fresh computation always
    uses internal_limit, so any caller limit up to it can be served from
    the same record.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        clock: Callable[[], float] = now_epoch_seconds,
        ttl_seconds: float = 120,
        internal_limit: int = 1000,
        page_size: int = 500,
        default_limit: int = 50,
    ):
        self._uow_factory = uow_factory
        self._clock = clock
        self._ttl = ttl_seconds
        self._internal_limit = internal_limit
        self._page_size = page_size
        self._default_limit = default_limit

    @classmethod
    def from_settings(cls, uow_factory, settings, clock=now_epoch_seconds) -> "LeaderboardCache":
        return cls(
            uow_factory,
            clock=clock,
            ttl_seconds=settings.leaderboard_cache_ttl_seconds,
            internal_limit=settings.leaderboard_cache_size,
            page_size=settings.scan_page_size,
            default_limit=settings.default_leaderboard_limit,
        )

    def get_leaderboard(
        self,
        period: LeaderboardPeriod,
        limit: Optional[int] = None,
        force_refresh: bool = False,
    ) -> list[LeaderboardEntry]:
        """Return the first `limit` entries, recomputing when stale or forced."""
        period = LeaderboardPeriod(period)
        if limit is None:
            limit = self._default_limit
        if not force_refresh:
            record = self.get_record(period)
            if record is not None and record.is_fresh(self._clock(), self._ttl):
                logger.debug("Leaderboard %s served from cache", period.value)
                return record.entries[:limit]

        return self.refresh(period).entries[:limit]

    def get_record(self, period: LeaderboardPeriod) -> Optional[LeaderboardCacheRecord]:
        with self._uow_factory() as uow:
            return uow.leaderboard_cache.get(LeaderboardPeriod(period))

    def refresh(self, period: LeaderboardPeriod) -> LeaderboardCacheRecord:
        """Recompute a period and overwrite its cache record."""
        period = LeaderboardPeriod(period)
        with self._uow_factory() as uow:
            aggregator = LeaderboardAggregator(uow.pnl, clock=self._clock, page_size=self._page_size)
            record = LeaderboardCacheRecord(
                period=period,
                entries=aggregator.compute_leaderboard(period, self._internal_limit),
                last_updated=self._clock(),
            )

        try:
            with self._uow_factory() as uow:
                uow.leaderboard_cache.upsert(record)
                uow.commit()
        except WriteConflictError as e:
            # A concurrent refresh of the same period won; ours is equally fresh
            logger.warning("Leaderboard %s cache write skipped: %s", period.value, e)
        else:
            logger.info(
                "Leaderboard %s refreshed with %d entries", period.value, len(record.entries)
            )
        return record

    def refresh_all(self) -> dict[LeaderboardPeriod, LeaderboardCacheRecord]:
        return {period: self.refresh(period) for period in LeaderboardPeriod}
