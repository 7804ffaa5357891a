"""View models for service outputs."""

from pumploss.domain.views.transfers import (
    NativeTransfer,
    AssetTransfer,
    TransferPayload,
)
from pumploss.domain.views.leaderboard import LeaderboardEntry, WalletStatsView
from pumploss.domain.views.results import (
    ApplyResult,
    IngestSummary,
    ImportSummary,
    TradedAsset,
    DatabaseSummary,
)

__all__ = [
    "NativeTransfer",
    "AssetTransfer",
    "TransferPayload",
    "LeaderboardEntry",
    "WalletStatsView",
    "ApplyResult",
    "IngestSummary",
    "ImportSummary",
    "TradedAsset",
    "DatabaseSummary",
]
