"""Token metadata and administrative endpoints."""

from fastapi import APIRouter, Depends

from pumploss.api.deps import (
    get_accounting_engine,
    get_admin_service,
    get_token_metadata_service,
)
from pumploss.api.schemas import (
    ClearDataResponse,
    DatabaseSummaryResponse,
    IngestSummaryResponse,
    TokenMetadataRequest,
    TokenMetadataResponse,
    TradedAssetResponse,
    TradeResponse,
)
from pumploss.core.exceptions import NotFoundError
from pumploss.services import AccountingEngine, AdminService, TokenMetadataService

tokens_router = APIRouter(prefix="/tokens", tags=["tokens"])
router = APIRouter(prefix="/admin", tags=["admin"])


@tokens_router.get("", response_model=list[TradedAssetResponse])
def list_traded_assets(
    tokens: TokenMetadataService = Depends(get_token_metadata_service),
) -> list[TradedAssetResponse]:
    """Mints seen in the Trade Log, most traded first."""
    return [TradedAssetResponse.model_validate(a) for a in tokens.list_traded_assets()]


@tokens_router.get("/{mint}", response_model=TokenMetadataResponse)
def get_token_metadata(
    mint: str,
    tokens: TokenMetadataService = Depends(get_token_metadata_service),
) -> TokenMetadataResponse:
    metadata = tokens.get_metadata(mint)
    if metadata is None:
        raise NotFoundError("Token", mint)
    return TokenMetadataResponse.model_validate(metadata)


@tokens_router.put("/{mint}", response_model=TokenMetadataResponse)
def upsert_token_metadata(
    mint: str,
    data: TokenMetadataRequest,
    tokens: TokenMetadataService = Depends(get_token_metadata_service),
) -> TokenMetadataResponse:
    metadata = tokens.upsert_metadata(
        mint,
        symbol=data.symbol,
        name=data.name,
        decimals=data.decimals,
        logo_uri=data.logo_uri,
    )
    return TokenMetadataResponse.model_validate(metadata)


@router.get("/summary", response_model=DatabaseSummaryResponse)
def get_database_summary(
    admin: AdminService = Depends(get_admin_service),
) -> DatabaseSummaryResponse:
    summary = admin.database_summary()
    return DatabaseSummaryResponse(
        total_trades=summary.total_trades,
        buy_trades=summary.buy_trades,
        sell_trades=summary.sell_trades,
        pending_trades=summary.pending_trades,
        ledger_entries=summary.ledger_entries,
        pnl_events=summary.pnl_events,
        degraded_pnl_events=summary.degraded_pnl_events,
        wallets=summary.wallets,
        token_metadata=summary.token_metadata,
        cache_records=summary.cache_records,
        recent_trades=[TradeResponse.model_validate(t) for t in summary.recent_trades],
    )


@router.post("/replay-pending", response_model=IngestSummaryResponse)
def replay_pending_trades(
    engine: AccountingEngine = Depends(get_accounting_engine),
) -> IngestSummaryResponse:
    """Re-apply trades logged without a committed ledger update."""
    return IngestSummaryResponse.model_validate(engine.replay_pending_trades())


@router.post("/clear", response_model=ClearDataResponse)
def clear_all_data(
    admin: AdminService = Depends(get_admin_service),
) -> ClearDataResponse:
    """Delete everything. Test/reset environments only."""
    return ClearDataResponse(deleted=admin.clear_all_data())
