"""Cached leaderboard records."""

from dataclasses import dataclass, field

from pumploss.domain.models.enums import LeaderboardPeriod


@dataclass
class LeaderboardCacheRecord:
    """
    Last computed leaderboard for one period.

    IMPORTANT: Never edit entries directly; always recompute from the PNL log.
    """

    period: LeaderboardPeriod
    entries: list = field(default_factory=list)  # list[LeaderboardEntry], ranked
    last_updated: float = 0.0

    def __post_init__(self) -> None:
        if isinstance(self.period, str):
            self.period = LeaderboardPeriod(self.period)

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return (now - self.last_updated) < ttl_seconds
