"""Ingress endpoints: transport payloads and direct classified trades."""

from typing import Any, Union

from fastapi import APIRouter, Body, Depends

from pumploss.api.deps import get_ingestion_service
from pumploss.api.schemas import (
    ApplyResultResponse,
    ClassifiedTradeRequest,
    IngestSummaryResponse,
    PnlEventResponse,
    PositionResponse,
    TradeResponse,
)
from pumploss.domain.views import ApplyResult
from pumploss.services import IngestionService

router = APIRouter(prefix="/ingest", tags=["ingest"])


def apply_result_to_response(result: ApplyResult) -> ApplyResultResponse:
    return ApplyResultResponse(
        status=result.status,
        trade=TradeResponse.model_validate(result.trade),
        pnl_event=PnlEventResponse.model_validate(result.pnl_event) if result.pnl_event else None,
        position=PositionResponse.model_validate(result.ledger_entry) if result.ledger_entry else None,
    )


@router.post("", response_model=IngestSummaryResponse)
def ingest_payloads(
    payload: Union[list[Any], dict[str, Any]] = Body(...),
    ingestion: IngestionService = Depends(get_ingestion_service),
) -> IngestSummaryResponse:
    """
    Classify and apply one transaction-like payload or an array of them.

    Payloads that are not trades are counted, never rejected.
    """
    payloads = payload if isinstance(payload, list) else [payload]
    summary = ingestion.ingest_batch(payloads)
    return IngestSummaryResponse.model_validate(summary)


@router.post("/trades", response_model=ApplyResultResponse)
def ingest_classified_trade(
    data: ClassifiedTradeRequest,
    ingestion: IngestionService = Depends(get_ingestion_service),
) -> ApplyResultResponse:
    """Apply an already-classified BUY/SELL trade."""
    result = ingestion.ingest_classified(
        signature=data.signature,
        block_time=data.block_time,
        trader_address=data.trader_address,
        asset_id=data.asset_id,
        direction=data.direction,
        asset_amount=data.asset_amount,
        quote_amount=data.quote_amount,
    )
    return apply_result_to_response(result)
