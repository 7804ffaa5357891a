"""Wallet aggregate repository protocol."""

from decimal import Decimal
from typing import Protocol, Optional

from pumploss.domain.models import WalletAggregate


class WalletRepository(Protocol):
    """Interface for per-wallet activity counters."""

    def get(self, address: str) -> Optional[WalletAggregate]:
        ...

    def record_trade(
        self,
        address: str,
        block_time: int,
        quote_amount: Decimal,
    ) -> WalletAggregate:
        """Create or bump the wallet's counters for one accepted trade."""
        ...

    def count(self) -> int:
        ...

    def delete_all(self) -> int:
        ...
