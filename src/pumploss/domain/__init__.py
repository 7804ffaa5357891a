"""Domain layer - pure business models with no external dependencies."""

from pumploss.domain.models import (
    Trade,
    WalletAggregate,
    LedgerEntry,
    RealizedPnlEvent,
    LeaderboardCacheRecord,
    TokenMetadata,
    TradeDirection,
    DirectionConfidence,
    ClassificationCase,
    LeaderboardPeriod,
    ApplyStatus,
)

__all__ = [
    "Trade",
    "WalletAggregate",
    "LedgerEntry",
    "RealizedPnlEvent",
    "LeaderboardCacheRecord",
    "TokenMetadata",
    "TradeDirection",
    "DirectionConfidence",
    "ClassificationCase",
    "LeaderboardPeriod",
    "ApplyStatus",
]
