"""Pydantic schemas for token metadata and administrative endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from pumploss.api.schemas.trade import TradeResponse


class TokenMetadataRequest(BaseModel):
    """Partial metadata; omitted fields keep their stored value."""

    symbol: Optional[str] = Field(default=None, max_length=32)
    name: Optional[str] = Field(default=None, max_length=200)
    decimals: Optional[int] = Field(default=None, ge=0, le=18)
    logo_uri: Optional[str] = None


class TokenMetadataResponse(BaseModel):
    model_config = {"from_attributes": True}

    mint: str
    symbol: Optional[str] = None
    name: Optional[str] = None
    decimals: int
    logo_uri: Optional[str] = None
    last_updated: Optional[float] = None


class TradedAssetResponse(BaseModel):
    model_config = {"from_attributes": True}

    mint: str
    trade_count: int
    has_metadata: bool


class DatabaseSummaryResponse(BaseModel):
    """Row counts across collections plus the most recent trades."""

    model_config = {"from_attributes": True}

    total_trades: int
    buy_trades: int
    sell_trades: int
    pending_trades: int
    ledger_entries: int
    pnl_events: int
    degraded_pnl_events: int
    wallets: int
    token_metadata: int
    cache_records: int
    recent_trades: list[TradeResponse]


class ClearDataResponse(BaseModel):
    deleted: dict[str, int]
