"""Enumerations for domain models."""

from enum import Enum


class TradeDirection(str, Enum):
    """Side of a trade from the trader's point of view."""

    ACQUIRE = "BUY"  # spends quote currency, receives the asset
    DISPOSE = "SELL"  # sends the asset, receives quote currency

    @classmethod
    def _missing_(cls, value):
        # Accept the member names as well as the BUY/SELL wire values
        if isinstance(value, str):
            name = value.strip().upper()
            if name in cls.__members__:
                return cls[name]
            for member in cls:
                if member.value == name:
                    return member
        return None


class DirectionConfidence(str, Enum):
    """How the trade direction was established."""

    EXACT = "exact"  # both transfer legs agree
    INFERRED = "inferred"  # decided by the fallback rule


class ClassificationCase(str, Enum):
    """Named outcomes of the direction decision table."""

    UNAMBIGUOUS_BUY = "UNAMBIGUOUS_BUY"
    UNAMBIGUOUS_SELL = "UNAMBIGUOUS_SELL"
    AMBIGUOUS_FALLBACK = "AMBIGUOUS_FALLBACK"
    DIRECT = "DIRECT"  # already classified upstream (backfill/manual entry)


class LeaderboardPeriod(str, Enum):
    """Aggregation windows for the loss leaderboard."""

    DAY = "24h"
    WEEK = "7d"
    ALL = "all"

    @property
    def window_seconds(self):
        """Length of the rolling window, or None when unbounded."""
        return _PERIOD_SECONDS[self]


_PERIOD_SECONDS = {
    LeaderboardPeriod.DAY: 24 * 60 * 60,
    LeaderboardPeriod.WEEK: 7 * 24 * 60 * 60,
    LeaderboardPeriod.ALL: None,
}


class ApplyStatus(str, Enum):
    """Outcome of applying one trade to the ledger."""

    APPLIED = "APPLIED"
    DUPLICATE = "DUPLICATE"
