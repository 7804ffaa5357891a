"""Trade classifier: turn a transfer payload into a directional trade."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from pumploss.domain.models import (
    Trade,
    TradeDirection,
    DirectionConfidence,
    ClassificationCase,
)
from pumploss.domain.views import NativeTransfer, AssetTransfer, TransferPayload

logger = logging.getLogger(__name__)


class LegRole(str, Enum):
    """The trader's position in one transfer leg."""

    SENDER = "SENDER"
    RECEIVER = "RECEIVER"
    BOTH = "BOTH"  # self-transfer


@dataclass(frozen=True)
class DirectionRule:
    case: ClassificationCase
    direction: TradeDirection
    confidence: DirectionConfidence


_BUY = DirectionRule(
    ClassificationCase.UNAMBIGUOUS_BUY, TradeDirection.ACQUIRE, DirectionConfidence.EXACT
)
_SELL = DirectionRule(
    ClassificationCase.UNAMBIGUOUS_SELL, TradeDirection.DISPOSE, DirectionConfidence.EXACT
)
_FALLBACK_ACQUIRE = DirectionRule(
    ClassificationCase.AMBIGUOUS_FALLBACK, TradeDirection.ACQUIRE, DirectionConfidence.INFERRED
)
_FALLBACK_DISPOSE = DirectionRule(
    ClassificationCase.AMBIGUOUS_FALLBACK, TradeDirection.DISPOSE, DirectionConfidence.INFERRED
)

# (native leg role, asset leg role) -> rule. Fallbacks follow the asset
# leg; when the asset leg is a self-transfer they follow the native leg.
# (BOTH, BOTH) is absent: no economic direction, not a trade.
DIRECTION_TABLE: dict[tuple[LegRole, LegRole], DirectionRule] = {
    (LegRole.SENDER, LegRole.RECEIVER): _BUY,
    (LegRole.RECEIVER, LegRole.SENDER): _SELL,
    (LegRole.SENDER, LegRole.SENDER): _FALLBACK_DISPOSE,
    (LegRole.RECEIVER, LegRole.RECEIVER): _FALLBACK_ACQUIRE,
    (LegRole.BOTH, LegRole.RECEIVER): _FALLBACK_ACQUIRE,
    (LegRole.BOTH, LegRole.SENDER): _FALLBACK_DISPOSE,
    (LegRole.SENDER, LegRole.BOTH): _FALLBACK_ACQUIRE,
    (LegRole.RECEIVER, LegRole.BOTH): _FALLBACK_DISPOSE,
}


def leg_role(address: str, from_address: Optional[str], to_address: Optional[str]) -> Optional[LegRole]:
    """Return the address's role in a transfer, or None if it is not a party."""
    sends = from_address == address
    receives = to_address == address
    if sends and receives:
        return LegRole.BOTH
    if sends:
        return LegRole.SENDER
    if receives:
        return LegRole.RECEIVER
    return None


class TradeClassifier:
    """
    Decide whether a transfer payload is a swap on the monitored program.

    Pure: no storage, no clock. Anything that does not classify cleanly
    returns None ("not a trade"); nothing here raises for bad payloads.

    Policy:
    - native leg: first transfer whose |amount| in quote units lies in
      [min_native_amount, max_native_amount]
    - asset leg: first transfer with a mint and a strictly positive amount
    - trader: first address party to both legs that is not a protocol account
    - direction: DIRECTION_TABLE
    """

    def __init__(
        self,
        min_native_amount: Decimal = Decimal("1"),
        max_native_amount: Decimal = Decimal("100"),
        native_decimals: int = 9,
        protocol_addresses: Iterable[str] = (),
    ):
        self._min_native = Decimal(str(min_native_amount))
        self._max_native = Decimal(str(max_native_amount))
        self._native_scale = Decimal(10) ** native_decimals
        self._denylist = frozenset(protocol_addresses)

    @classmethod
    def from_settings(cls, settings) -> "TradeClassifier":
        return cls(
            min_native_amount=settings.min_native_amount,
            max_native_amount=settings.max_native_amount,
            native_decimals=settings.native_decimals,
            protocol_addresses=[*settings.protocol_addresses, settings.monitored_program_id],
        )

    def classify(self, payload: TransferPayload) -> Optional[Trade]:
        """Return a Trade candidate (not persisted) or None."""
        if not isinstance(payload.signature, str) or not payload.signature:
            logger.debug("Payload without signature skipped")
            return None
        if payload.block_time is None:
            logger.debug("Payload %s has no block time", payload.signature[:8])
            return None

        native = self.select_native_transfer(payload.native_transfers)
        asset = self.select_asset_transfer(payload.asset_transfers)
        if native is None or asset is None:
            logger.debug("No qualifying transfer pair in %s", payload.signature[:8])
            return None

        trader = self.select_trader(native, asset)
        if trader is None:
            logger.debug("No trader address common to both legs in %s", payload.signature[:8])
            return None

        quote_amount = self.to_quote_units(native.amount)
        if not quote_amount.is_finite() or quote_amount <= 0:
            logger.debug("Unusable native amount in %s", payload.signature[:8])
            return None

        rule = DIRECTION_TABLE.get(
            (
                leg_role(trader, native.from_address, native.to_address),
                leg_role(trader, asset.from_address, asset.to_address),
            )
        )
        if rule is None:
            logger.debug("Self-transfer on both legs in %s", payload.signature[:8])
            return None

        if rule.case == ClassificationCase.AMBIGUOUS_FALLBACK:
            logger.info(
                "Ambiguous direction for %s by %s, inferred %s",
                payload.signature[:8],
                trader[:8],
                rule.direction.name,
            )

        return Trade(
            signature=payload.signature,
            block_time=int(payload.block_time),
            trader_address=trader,
            asset_id=asset.mint,
            direction=rule.direction,
            asset_amount=asset.amount,
            quote_amount=quote_amount,
            direction_confidence=rule.confidence,
            classification_case=rule.case,
        )

    def to_quote_units(self, base_units: int) -> Decimal:
        """Convert base-unit native amount (e.g. lamports) to quote currency."""
        return abs(Decimal(base_units)) / self._native_scale

    def select_native_transfer(
        self, transfers: Iterable[NativeTransfer]
    ) -> Optional[NativeTransfer]:
        for transfer in transfers:
            if not transfer.amount:
                continue
            quote = self.to_quote_units(transfer.amount)
            if self._min_native <= quote <= self._max_native:
                return transfer
        return None

    @staticmethod
    def select_asset_transfer(transfers: Iterable[AssetTransfer]) -> Optional[AssetTransfer]:
        for transfer in transfers:
            if transfer.mint and transfer.amount.is_finite() and transfer.amount > 0:
                return transfer
        return None

    def select_trader(self, native: NativeTransfer, asset: AssetTransfer) -> Optional[str]:
        asset_parties = {asset.from_address, asset.to_address}
        ordered = (native.from_address, native.to_address, asset.from_address, asset.to_address)
        for address in ordered:
            if not address or address in self._denylist:
                continue
            if address in asset_parties and address in (native.from_address, native.to_address):
                return address
        return None
