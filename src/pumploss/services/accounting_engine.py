"""Accounting engine: apply trades to the ledger under weighted-average cost."""

import logging
import time
from decimal import Decimal
from typing import Callable, Optional

from pumploss.core.exceptions import DuplicateTradeError, TradeProcessingError
from pumploss.core.timezone import now_epoch_seconds
from pumploss.domain.models import (
    ApplyStatus,
    LedgerEntry,
    RealizedPnlEvent,
    Trade,
)
from pumploss.domain.views import ApplyResult, IngestSummary
from pumploss.repositories.protocols import UnitOfWork
from pumploss.services.locking import KeyedLockArena
from pumploss.services.retry import RetryConfig, RetriesExhausted, run_with_retry

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def apply_acquisition(
    entry: Optional[LedgerEntry], trade: Trade, now: int
) -> LedgerEntry:
    """Blend an acquisition into the position's weighted-average cost."""
    if entry is None:
        return LedgerEntry(
            wallet_address=trade.trader_address,
            asset_id=trade.asset_id,
            quantity_held=trade.asset_amount,
            weighted_avg_cost=trade.quote_amount / trade.asset_amount,
            last_updated=now,
        )

    new_quantity = entry.quantity_held + trade.asset_amount
    new_cost = (entry.quantity_held * entry.weighted_avg_cost + trade.quote_amount) / new_quantity
    return LedgerEntry(
        wallet_address=entry.wallet_address,
        asset_id=entry.asset_id,
        quantity_held=new_quantity,
        weighted_avg_cost=new_cost,
        last_updated=now,
    )


def apply_disposal(
    entry: Optional[LedgerEntry], trade: Trade, now: int
) -> tuple[Optional[LedgerEntry], RealizedPnlEvent]:
    """
    Realize PNL for a disposal.

    Returns (position after the trade, event). The position is None when
    the disposal closed it. Without enough basis the position is returned
    untouched and the event is degraded (pnl 0, cost basis = proceeds).
    """
    if entry is None or entry.quantity_held < trade.asset_amount:
        event = RealizedPnlEvent(
            trade_signature=trade.signature,
            wallet_address=trade.trader_address,
            asset_id=trade.asset_id,
            quantity_disposed=trade.asset_amount,
            proceeds_quote=trade.quote_amount,
            cost_basis_quote=trade.quote_amount,
            pnl_quote=ZERO,
            block_time=trade.block_time,
            cost_basis_known=False,
        )
        return entry, event

    cost_basis = trade.asset_amount * entry.weighted_avg_cost
    event = RealizedPnlEvent(
        trade_signature=trade.signature,
        wallet_address=trade.trader_address,
        asset_id=trade.asset_id,
        quantity_disposed=trade.asset_amount,
        proceeds_quote=trade.quote_amount,
        cost_basis_quote=cost_basis,
        pnl_quote=trade.quote_amount - cost_basis,
        block_time=trade.block_time,
    )

    remaining = entry.quantity_held - trade.asset_amount
    if remaining <= 0:
        return None, event

    return (
        LedgerEntry(
            wallet_address=entry.wallet_address,
            asset_id=entry.asset_id,
            quantity_held=remaining,
            weighted_avg_cost=entry.weighted_avg_cost,
            last_updated=now,
        ),
        event,
    )


class AccountingEngine:
    """
    Applies classified trades exactly once.

    Each trade goes through two commits, both under the (wallet, asset) lock:
    1. Trade Log insert + wallet aggregate update. A signature already in
       the log and already applied is a duplicate no-op.
    2. Ledger mutation + PNL append + applied marker, as one transaction.
       Write conflicts are retried up to the configured attempt count,
       then surfaced as TradeProcessingError; the trade stays logged and
       shows up as pending until replayed.
    """

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        lock_arena: Optional[KeyedLockArena] = None,
        retry_config: Optional[RetryConfig] = None,
        clock: Callable[[], float] = now_epoch_seconds,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._uow_factory = uow_factory
        self._locks = lock_arena or KeyedLockArena()
        self._retry = retry_config or RetryConfig()
        self._clock = clock
        self._sleep = sleep

    def apply_trade(self, trade: Trade) -> ApplyResult:
        """Apply one trade; idempotent on trade.signature."""
        with self._locks.hold(trade.ledger_key):
            logged, applied = self._record_trade(trade)
            if applied:
                logger.debug("Duplicate trade %s ignored", trade.signature[:8])
                with self._uow_factory() as uow:
                    return self._duplicate_result(uow, logged)

            try:
                return run_with_retry(
                    lambda: self._apply_to_ledger(logged),
                    self._retry,
                    label=f"ledger update for {logged.signature[:8]}",
                    sleep=self._sleep,
                )
            except RetriesExhausted as e:
                raise TradeProcessingError(
                    logged.signature, e.attempts, str(e.last_error)
                ) from e.last_error

    def replay_pending_trades(self, limit: Optional[int] = None) -> IngestSummary:
        """Re-apply trades that were logged but never reached the ledger."""
        with self._uow_factory() as uow:
            pending = uow.trades.list_pending(limit)

        summary = IngestSummary(received=len(pending), classified=len(pending))
        for trade in pending:
            try:
                result = self.apply_trade(trade)
            except TradeProcessingError as e:
                summary.errors += 1
                summary.error_messages.append(e.message)
                continue
            if result.is_duplicate:
                summary.duplicates += 1
            else:
                summary.applied += 1

        if pending:
            logger.info(
                "Replayed %d pending trades: %d applied, %d errors",
                summary.received,
                summary.applied,
                summary.errors,
            )
        return summary

    def get_position(self, wallet_address: str, asset_id: str) -> Optional[LedgerEntry]:
        with self._uow_factory() as uow:
            return uow.ledger.get(wallet_address, asset_id)

    def list_positions(self, wallet_address: str) -> list[LedgerEntry]:
        with self._uow_factory() as uow:
            return uow.ledger.list_by_wallet(wallet_address)

    def _record_trade(self, trade: Trade) -> tuple[Trade, bool]:
        """Log the trade if new; return (logged trade, already applied)."""

        def record() -> tuple[Trade, bool]:
            with self._uow_factory() as uow:
                existing = uow.trades.get_by_signature(trade.signature)
                if existing is not None:
                    return existing, uow.trades.is_applied(trade.signature)
                uow.trades.add(trade)
                uow.wallets.record_trade(
                    trade.trader_address, trade.block_time, trade.quote_amount
                )
                uow.commit()
                return trade, False

        try:
            return run_with_retry(
                record,
                self._retry,
                label=f"trade log insert for {trade.signature[:8]}",
                sleep=self._sleep,
            )
        except DuplicateTradeError:
            # Another delivery of the same signature committed first
            with self._uow_factory() as uow:
                existing = uow.trades.get_by_signature(trade.signature)
                return existing, uow.trades.is_applied(trade.signature)
        except RetriesExhausted as e:
            raise TradeProcessingError(
                trade.signature, e.attempts, str(e.last_error)
            ) from e.last_error

    def _apply_to_ledger(self, trade: Trade) -> ApplyResult:
        now = int(self._clock())
        with self._uow_factory() as uow:
            if uow.trades.is_applied(trade.signature):
                return self._duplicate_result(uow, trade)

            entry = uow.ledger.get(trade.trader_address, trade.asset_id)
            event = None
            if trade.is_acquire:
                entry = uow.ledger.save(apply_acquisition(entry, trade, now))
            else:
                updated, event = apply_disposal(entry, trade, now)
                if event.cost_basis_known and updated is None:
                    uow.ledger.delete(trade.trader_address, trade.asset_id)
                elif event.cost_basis_known:
                    updated = uow.ledger.save(updated)
                entry = updated
                uow.pnl.add(event)

            uow.trades.mark_applied(trade.signature, self._clock())
            uow.commit()

        if event is not None and not event.cost_basis_known:
            logger.warning(
                "Insufficient cost basis for %s: %s disposed %s of %s, recorded break-even",
                trade.signature[:8],
                trade.trader_address[:8],
                trade.asset_amount,
                trade.asset_id[:8],
            )
        logger.info(
            "Applied %s %s %s of %s for %s quote",
            trade.signature[:8],
            trade.direction.value,
            trade.asset_amount,
            trade.asset_id[:8],
            trade.quote_amount,
        )
        return ApplyResult(
            status=ApplyStatus.APPLIED, trade=trade, pnl_event=event, ledger_entry=entry
        )

    @staticmethod
    def _duplicate_result(uow: UnitOfWork, trade: Trade) -> ApplyResult:
        return ApplyResult(
            status=ApplyStatus.DUPLICATE,
            trade=trade,
            pnl_event=uow.pnl.get_by_trade(trade.signature),
            ledger_entry=uow.ledger.get(trade.trader_address, trade.asset_id),
        )
