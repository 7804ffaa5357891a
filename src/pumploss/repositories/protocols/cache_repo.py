"""Leaderboard cache repository protocol."""

from typing import Protocol, Optional

from pumploss.domain.models import LeaderboardCacheRecord, LeaderboardPeriod


class LeaderboardCacheRepository(Protocol):
    """Interface for cached leaderboard records keyed by period."""

    def get(self, period: LeaderboardPeriod) -> Optional[LeaderboardCacheRecord]:
        ...

    def upsert(self, record: LeaderboardCacheRecord) -> LeaderboardCacheRecord:
        """Insert or overwrite the record for record.period."""
        ...

    def count(self) -> int:
        ...

    def delete_all(self) -> int:
        ...
