"""Ingress: classify-and-apply for transport payloads and direct trades."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable, Optional, Union

from pumploss.core.exceptions import AppError, ValidationError
from pumploss.core.timezone import now_epoch_seconds, parse_block_time
from pumploss.domain.models import (
    Trade,
    TradeDirection,
    DirectionConfidence,
    ClassificationCase,
)
from pumploss.domain.views import ApplyResult, IngestSummary, TransferPayload
from pumploss.services.accounting_engine import AccountingEngine
from pumploss.services.trade_classifier import TradeClassifier

logger = logging.getLogger(__name__)


class IngestionService:
    """
    Entry point for everything the upstream transport delivers.

    Transfer payloads that do not classify are "not a trade" and return
    None. Storage failures for one event propagate for that event only;
    batch ingestion counts them and moves on.
    """

    def __init__(
        self,
        classifier: TradeClassifier,
        engine: AccountingEngine,
        clock: Callable[[], float] = now_epoch_seconds,
    ):
        self._classifier = classifier
        self._engine = engine
        self._clock = clock

    def ingest_payload(
        self, payload: Union[TransferPayload, dict[str, Any]]
    ) -> Optional[ApplyResult]:
        """Classify one payload and apply it if it is a trade."""
        if not isinstance(payload, TransferPayload):
            payload = TransferPayload.from_dict(payload)
        if payload.block_time is None:
            # Transport omitted the timestamp: the event is happening now
            payload.block_time = int(self._clock())

        trade = self._classifier.classify(payload)
        if trade is None:
            return None
        return self._engine.apply_trade(trade)

    def ingest_batch(self, payloads: Iterable[Any]) -> IngestSummary:
        """Classify and apply each payload independently."""
        summary = IngestSummary()
        for raw in payloads:
            summary.received += 1
            if not isinstance(raw, (dict, TransferPayload)):
                summary.not_trades += 1
                continue
            try:
                result = self.ingest_payload(raw)
            except AppError as e:
                logger.error("Failed to ingest event: %s", e.message)
                summary.classified += 1
                summary.errors += 1
                summary.error_messages.append(e.message)
                continue

            if result is None:
                summary.not_trades += 1
                continue
            summary.classified += 1
            if result.is_duplicate:
                summary.duplicates += 1
            else:
                summary.applied += 1

        logger.info(
            "Batch of %d: %d applied, %d duplicates, %d not trades, %d errors",
            summary.received,
            summary.applied,
            summary.duplicates,
            summary.not_trades,
            summary.errors,
        )
        return summary

    def ingest_classified(
        self,
        signature: str,
        block_time: Any,
        trader_address: str,
        asset_id: str,
        direction: Any,
        asset_amount: Any,
        quote_amount: Any,
    ) -> ApplyResult:
        """Apply an already-classified BUY/SELL trade (backfill, manual entry)."""
        trade = build_direct_trade(
            signature=signature,
            block_time=block_time,
            trader_address=trader_address,
            asset_id=asset_id,
            direction=direction,
            asset_amount=asset_amount,
            quote_amount=quote_amount,
        )
        return self._engine.apply_trade(trade)


def build_direct_trade(
    signature: str,
    block_time: Any,
    trader_address: str,
    asset_id: str,
    direction: Any,
    asset_amount: Any,
    quote_amount: Any,
) -> Trade:
    """Validate direct-entry fields into a Trade; raises ValidationError."""
    for field_name, value in (
        ("signature", signature),
        ("trader_address", trader_address),
        ("asset_id", asset_id),
    ):
        if not value or not str(value).strip():
            raise ValidationError(f"{field_name} is required")

    try:
        parsed_direction = TradeDirection(direction)
    except ValueError:
        raise ValidationError(f"Invalid direction: {direction!r}; expected BUY or SELL")

    if block_time is None or block_time == "":
        raise ValidationError("block_time is required")
    try:
        parsed_time = parse_block_time(block_time)
    except (ValueError, OverflowError):
        raise ValidationError(f"Invalid block_time: {block_time!r}")

    amounts = {}
    for field_name, value in (("asset_amount", asset_amount), ("quote_amount", quote_amount)):
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"Invalid {field_name}: {value!r}")
        if not amount.is_finite() or amount <= 0:
            raise ValidationError(f"{field_name} must be positive")
        amounts[field_name] = amount

    return Trade(
        signature=str(signature).strip(),
        block_time=parsed_time,
        trader_address=str(trader_address).strip(),
        asset_id=str(asset_id).strip(),
        direction=parsed_direction,
        asset_amount=amounts["asset_amount"],
        quote_amount=amounts["quote_amount"],
        direction_confidence=DirectionConfidence.EXACT,
        classification_case=ClassificationCase.DIRECT,
    )
