"""Repository layer - data access abstractions and implementations."""

from pumploss.repositories.protocols import (
    TradeRepository,
    LedgerRepository,
    PnlRepository,
    WalletRepository,
    LeaderboardCacheRepository,
    TokenMetadataRepository,
    UnitOfWork,
)

__all__ = [
    "TradeRepository",
    "LedgerRepository",
    "PnlRepository",
    "WalletRepository",
    "LeaderboardCacheRepository",
    "TokenMetadataRepository",
    "UnitOfWork",
]
