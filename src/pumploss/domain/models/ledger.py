"""Ledger position domain model."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class LedgerEntry:
    """
    Open position for one (wallet, asset) pair under weighted-average cost.

    IMPORTANT: Only the AccountingEngine mutates these. Zero-quantity
    entries are deleted, never stored.
    """

    wallet_address: str
    asset_id: str
    quantity_held: Decimal
    weighted_avg_cost: Decimal  # quote currency per unit of asset
    last_updated: int

    @property
    def cost_basis_total(self) -> Decimal:
        return self.quantity_held * self.weighted_avg_cost
