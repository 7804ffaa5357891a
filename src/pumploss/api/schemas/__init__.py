"""Pydantic schemas for API request/response."""

from pumploss.api.schemas.trade import (
    ClassifiedTradeRequest,
    TradeResponse,
    TradeListResponse,
    PnlEventResponse,
    PositionResponse,
    ApplyResultResponse,
    IngestSummaryResponse,
)
from pumploss.api.schemas.leaderboard import (
    LeaderboardEntryResponse,
    LeaderboardResponse,
    LeaderboardRefreshResponse,
    WalletStatsResponse,
)
from pumploss.api.schemas.admin import (
    TokenMetadataRequest,
    TokenMetadataResponse,
    TradedAssetResponse,
    DatabaseSummaryResponse,
    ClearDataResponse,
)

__all__ = [
    "ClassifiedTradeRequest",
    "TradeResponse",
    "TradeListResponse",
    "PnlEventResponse",
    "PositionResponse",
    "ApplyResultResponse",
    "IngestSummaryResponse",
    "LeaderboardEntryResponse",
    "LeaderboardResponse",
    "LeaderboardRefreshResponse",
    "WalletStatsResponse",
    "TokenMetadataRequest",
    "TokenMetadataResponse",
    "TradedAssetResponse",
    "DatabaseSummaryResponse",
    "ClearDataResponse",
]
