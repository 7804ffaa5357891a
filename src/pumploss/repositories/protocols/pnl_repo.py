"""PNL Log repository protocol."""

from typing import Iterator, Protocol, Optional

from pumploss.domain.models import RealizedPnlEvent


class PnlRepository(Protocol):
    """Interface for the append-only realized PNL log."""

    def add(self, event: RealizedPnlEvent) -> RealizedPnlEvent:
        """Append a PNL event."""
        ...

    def get_by_trade(self, trade_signature: str) -> Optional[RealizedPnlEvent]:
        """Get the event produced by a disposal trade."""
        ...

    def iter_events(
        self,
        since: Optional[int] = None,
        wallet_address: Optional[str] = None,
        losses_only: bool = False,
        page_size: int = 500,
    ) -> Iterator[RealizedPnlEvent]:
        """
        Stream events with block_time >= since, in (block_time, id) order.

        Reads page by page so a scan never exceeds page_size rows per query.
        """
        ...

    def list_by_wallet(self, wallet_address: str) -> list[RealizedPnlEvent]:
        """List a wallet's events in block time order."""
        ...

    def count(self, degraded_only: bool = False) -> int:
        ...

    def delete_all(self) -> int:
        ...
