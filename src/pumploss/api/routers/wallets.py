"""Wallet and trade query endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from pumploss.api.deps import get_wallet_query_service, get_accounting_engine
from pumploss.api.schemas import (
    PositionResponse,
    TradeListResponse,
    TradeResponse,
    WalletStatsResponse,
)
from pumploss.services import AccountingEngine, WalletQueryService

router = APIRouter(prefix="/wallets", tags=["wallets"])
trades_router = APIRouter(prefix="/trades", tags=["trades"])


@router.get("/{wallet_address}/stats", response_model=WalletStatsResponse)
def get_wallet_stats(
    wallet_address: str,
    include_degraded: bool = Query(True),
    queries: WalletQueryService = Depends(get_wallet_query_service),
) -> WalletStatsResponse:
    """Realized PNL at 24h/7d/all time, loss counts and activity."""
    stats = queries.get_wallet_stats(wallet_address, include_degraded=include_degraded)
    return WalletStatsResponse.model_validate(stats)


@router.get("/{wallet_address}/trades", response_model=TradeListResponse)
def get_wallet_trades(
    wallet_address: str,
    limit: Optional[int] = Query(None, ge=1, le=500),
    queries: WalletQueryService = Depends(get_wallet_query_service),
) -> TradeListResponse:
    """A wallet's trades, newest first."""
    trades = queries.get_wallet_trades(wallet_address, limit)
    return TradeListResponse(
        trades=[TradeResponse.model_validate(t) for t in trades],
        total=len(trades),
    )


@router.get("/{wallet_address}/positions", response_model=list[PositionResponse])
def get_wallet_positions(
    wallet_address: str,
    engine: AccountingEngine = Depends(get_accounting_engine),
) -> list[PositionResponse]:
    """Open positions with their weighted-average cost."""
    return [PositionResponse.model_validate(e) for e in engine.list_positions(wallet_address)]


@trades_router.get("/recent", response_model=TradeListResponse)
def get_recent_trades(
    limit: Optional[int] = Query(None, ge=1, le=500),
    queries: WalletQueryService = Depends(get_wallet_query_service),
) -> TradeListResponse:
    """Trades across all wallets, newest first."""
    trades = queries.get_recent_trades(limit)
    return TradeListResponse(
        trades=[TradeResponse.model_validate(t) for t in trades],
        total=len(trades),
    )


@trades_router.get("/{signature}", response_model=TradeResponse)
def get_trade(
    signature: str,
    queries: WalletQueryService = Depends(get_wallet_query_service),
) -> TradeResponse:
    return TradeResponse.model_validate(queries.get_trade(signature))
