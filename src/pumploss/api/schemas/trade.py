"""Pydantic schemas for trade, ingestion and position endpoints."""

from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field

from pumploss.domain.models import (
    ApplyStatus,
    TradeDirection,
    DirectionConfidence,
    ClassificationCase,
)


class ClassifiedTradeRequest(BaseModel):
    """Request schema for an already-classified trade (backfill, manual entry)."""

    signature: str = Field(..., min_length=1, description="Transaction signature")
    block_time: Union[int, float, str] = Field(
        ..., description="Epoch seconds or ISO-8601 timestamp (UTC if no offset)"
    )
    trader_address: str = Field(..., min_length=1)
    asset_id: str = Field(..., min_length=1, description="Token mint")
    direction: str = Field(..., description="BUY or SELL")
    asset_amount: Decimal = Field(..., gt=0)
    quote_amount: Decimal = Field(..., gt=0)


class TradeResponse(BaseModel):
    """Response schema for a Trade Log entry."""

    model_config = {"from_attributes": True}

    signature: str
    block_time: int
    trader_address: str
    asset_id: str
    direction: TradeDirection
    asset_amount: Decimal
    quote_amount: Decimal
    direction_confidence: DirectionConfidence
    classification_case: ClassificationCase


class TradeListResponse(BaseModel):
    trades: list[TradeResponse]
    total: int


class PnlEventResponse(BaseModel):
    """Response schema for a realized PNL event."""

    model_config = {"from_attributes": True}

    trade_signature: str
    wallet_address: str
    asset_id: str
    quantity_disposed: Decimal
    proceeds_quote: Decimal
    cost_basis_quote: Decimal
    pnl_quote: Decimal
    block_time: int
    cost_basis_known: bool


class PositionResponse(BaseModel):
    """Response schema for an open ledger position."""

    model_config = {"from_attributes": True}

    wallet_address: str
    asset_id: str
    quantity_held: Decimal
    weighted_avg_cost: Decimal
    last_updated: int


class ApplyResultResponse(BaseModel):
    status: ApplyStatus
    trade: TradeResponse
    pnl_event: Optional[PnlEventResponse] = None
    position: Optional[PositionResponse] = None


class IngestSummaryResponse(BaseModel):
    """Per-batch ingestion counts."""

    model_config = {"from_attributes": True}

    received: int
    classified: int
    applied: int
    duplicates: int
    not_trades: int
    errors: int
    error_messages: list[str] = []
