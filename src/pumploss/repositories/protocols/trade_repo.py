"""Trade Log repository protocol."""

from typing import Protocol, Optional

from pumploss.domain.models import Trade, TradeDirection


class TradeRepository(Protocol):
    """Interface for the append-only Trade Log."""

    def add(self, trade: Trade) -> Trade:
        """Append a trade; raises on a duplicate signature."""
        ...

    def get_by_signature(self, signature: str) -> Optional[Trade]:
        """Retrieve trade by signature."""
        ...

    def list_by_trader(self, trader_address: str, limit: int) -> list[Trade]:
        """List a wallet's trades, newest first."""
        ...

    def list_recent(self, limit: int) -> list[Trade]:
        """List trades across all wallets, newest first."""
        ...

    def list_all(self) -> list[Trade]:
        """List every trade in block time order."""
        ...

    def count_by_direction(self) -> dict[TradeDirection, int]:
        """Count trades per direction."""
        ...

    def count_by_asset(self) -> dict[str, int]:
        """Count trades per asset mint."""
        ...

    def mark_applied(self, signature: str, applied_at: float) -> None:
        """Record that the trade's ledger effects are committed."""
        ...

    def is_applied(self, signature: str) -> bool:
        """Check whether the trade's ledger effects are committed."""
        ...

    def list_pending(self, limit: Optional[int] = None) -> list[Trade]:
        """List logged trades whose ledger effects never committed."""
        ...

    def delete_all(self) -> int:
        """Delete every trade and application marker."""
        ...
