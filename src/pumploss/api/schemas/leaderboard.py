"""Pydantic schemas for leaderboard and wallet stats endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from pumploss.domain.models import LeaderboardPeriod


class LeaderboardEntryResponse(BaseModel):
    """Response schema for one ranked wallet."""

    model_config = {"from_attributes": True}

    rank: int
    wallet_address: str
    pnl_amount: Decimal
    loss_trade_count: int
    biggest_loss_asset: Optional[str] = None
    last_loss_time: Optional[int] = None
    all_time_loss: Decimal


class LeaderboardResponse(BaseModel):
    period: LeaderboardPeriod
    entries: list[LeaderboardEntryResponse]
    last_updated: Optional[float] = None


class LeaderboardRefreshResponse(BaseModel):
    period: LeaderboardPeriod
    entry_count: int
    last_updated: float


class WalletStatsResponse(BaseModel):
    """Response schema for wallet statistics."""

    model_config = {"from_attributes": True}

    wallet_address: str
    pnl_24h: Decimal
    pnl_7d: Decimal
    pnl_all_time: Decimal
    loss_count_24h: int
    loss_count_7d: int
    loss_count_all_time: int
    biggest_loss: Decimal
    biggest_loss_asset: Optional[str] = None
    degraded_event_count: int
    total_trades: int
    total_volume_quote: Decimal
    first_seen: Optional[int] = None
    last_seen: Optional[int] = None
