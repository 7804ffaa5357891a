"""Realized PNL domain model."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class RealizedPnlEvent:
    """
    Profit or loss recognized by one disposal.

    When cost_basis_known is False the wallet held no (or not enough)
    basis at disposal time: pnl_quote is 0 and cost_basis_quote equals
    proceeds_quote (break-even assumption), kept for later audit.
    """

    trade_signature: str
    wallet_address: str
    asset_id: str
    quantity_disposed: Decimal
    proceeds_quote: Decimal
    cost_basis_quote: Decimal
    pnl_quote: Decimal
    block_time: int
    cost_basis_known: bool = True

    @property
    def is_loss(self) -> bool:
        return self.pnl_quote < 0
