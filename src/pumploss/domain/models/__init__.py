"""Domain models package."""

from pumploss.domain.models.enums import (
    TradeDirection,
    DirectionConfidence,
    ClassificationCase,
    LeaderboardPeriod,
    ApplyStatus,
)
from pumploss.domain.models.trade import Trade, WalletAggregate
from pumploss.domain.models.ledger import LedgerEntry
from pumploss.domain.models.pnl import RealizedPnlEvent
from pumploss.domain.models.cache import LeaderboardCacheRecord
from pumploss.domain.models.token import TokenMetadata

__all__ = [
    "TradeDirection",
    "DirectionConfidence",
    "ClassificationCase",
    "LeaderboardPeriod",
    "ApplyStatus",
    "Trade",
    "WalletAggregate",
    "LedgerEntry",
    "RealizedPnlEvent",
    "LeaderboardCacheRecord",
    "TokenMetadata",
]
