"""Ledger Store repository protocol."""

from typing import Protocol, Optional

from pumploss.domain.models import LedgerEntry


class LedgerRepository(Protocol):
    """Interface for per-(wallet, asset) WAC positions."""

    def get(self, wallet_address: str, asset_id: str) -> Optional[LedgerEntry]:
        """Get the open position, if any."""
        ...

    def save(self, entry: LedgerEntry) -> LedgerEntry:
        """Insert or update a position (version-checked on update)."""
        ...

    def delete(self, wallet_address: str, asset_id: str) -> None:
        """Remove a fully exited position."""
        ...

    def list_by_wallet(self, wallet_address: str) -> list[LedgerEntry]:
        """List a wallet's open positions."""
        ...

    def count(self) -> int:
        ...

    def delete_all(self) -> int:
        ...
