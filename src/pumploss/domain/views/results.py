"""Result views for ingestion and administrative operations."""

from dataclasses import dataclass, field
from typing import Optional

from pumploss.domain.models import (
    ApplyStatus,
    Trade,
    LedgerEntry,
    RealizedPnlEvent,
)


@dataclass
class ApplyResult:
    """What applying one trade did to the ledger."""

    status: ApplyStatus
    trade: Trade
    pnl_event: Optional[RealizedPnlEvent] = None
    ledger_entry: Optional[LedgerEntry] = None  # None when absent or deleted

    @property
    def is_duplicate(self) -> bool:
        return self.status == ApplyStatus.DUPLICATE


@dataclass
class IngestSummary:
    """Counts for one batch delivered by the transport."""

    received: int = 0
    classified: int = 0
    applied: int = 0
    duplicates: int = 0
    not_trades: int = 0
    errors: int = 0
    error_messages: list[str] = field(default_factory=list)


@dataclass
class ImportSummary:
    """Summary of a CSV backfill."""

    imported_count: int = 0
    duplicate_count: int = 0
    error_count: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass
class TradedAsset:
    """A mint seen in the Trade Log."""

    mint: str
    trade_count: int
    has_metadata: bool = False


@dataclass
class DatabaseSummary:
    """Row counts across the persisted collections."""

    total_trades: int = 0
    buy_trades: int = 0
    sell_trades: int = 0
    pending_trades: int = 0
    ledger_entries: int = 0
    pnl_events: int = 0
    degraded_pnl_events: int = 0
    wallets: int = 0
    token_metadata: int = 0
    cache_records: int = 0
    recent_trades: list[Trade] = field(default_factory=list)
