"""Trade and wallet aggregate domain models."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from pumploss.domain.models.enums import (
    TradeDirection,
    DirectionConfidence,
    ClassificationCase,
)


@dataclass(frozen=True)
class Trade:
    """
    Immutable swap fact (Trade Log entry).

    The signature is globally unique; a second ingestion with the same
    signature is a no-op. Amounts are always positive: asset_amount in
    token units, quote_amount in the network's base currency.
    """

    signature: str
    block_time: int
    trader_address: str
    asset_id: str
    direction: TradeDirection
    asset_amount: Decimal
    quote_amount: Decimal
    direction_confidence: DirectionConfidence = DirectionConfidence.EXACT
    classification_case: ClassificationCase = ClassificationCase.DIRECT

    def __post_init__(self) -> None:
        # frozen dataclass: coerce through object.__setattr__
        if not isinstance(self.direction, TradeDirection):
            object.__setattr__(self, "direction", TradeDirection(self.direction))
        if not isinstance(self.direction_confidence, DirectionConfidence):
            object.__setattr__(
                self, "direction_confidence", DirectionConfidence(self.direction_confidence)
            )
        if not isinstance(self.classification_case, ClassificationCase):
            object.__setattr__(
                self, "classification_case", ClassificationCase(self.classification_case)
            )
        for name in ("asset_amount", "quote_amount"):
            value = getattr(self, name)
            if not isinstance(value, Decimal):
                object.__setattr__(self, name, Decimal(str(value)))

    @property
    def is_acquire(self) -> bool:
        return self.direction == TradeDirection.ACQUIRE

    @property
    def is_dispose(self) -> bool:
        return self.direction == TradeDirection.DISPOSE

    @property
    def ledger_key(self) -> tuple[str, str]:
        """(wallet, asset) key of the position this trade touches."""
        return (self.trader_address, self.asset_id)


@dataclass
class WalletAggregate:
    """Per-wallet activity counters, updated with every accepted trade."""

    address: str
    first_seen: int
    last_seen: int
    total_trades: int = 0
    total_volume_quote: Decimal = field(default_factory=lambda: Decimal("0"))
