"""Transport payload shapes consumed by the trade classifier."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional


@dataclass(frozen=True)
class NativeTransfer:
    """Movement of the network's base currency, amount in base units."""

    from_address: Optional[str]
    to_address: Optional[str]
    amount: int


@dataclass(frozen=True)
class AssetTransfer:
    """Movement of a token, amount in token units."""

    from_address: Optional[str]
    to_address: Optional[str]
    mint: Optional[str]
    amount: Decimal


def _text(value: Any) -> Optional[str]:
    """Keep string values only; anything else counts as missing."""
    return value if isinstance(value, str) else None


@dataclass
class TransferPayload:
    """One transaction-like event delivered by the upstream transport."""

    signature: Optional[str]
    block_time: Optional[int]
    native_transfers: list[NativeTransfer] = field(default_factory=list)
    asset_transfers: list[AssetTransfer] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransferPayload":
        """
        Build a payload from an enhanced-transaction style dict.

        Unknown keys are ignored and malformed transfer records are
        skipped, so an unrelated payload simply yields no transfers.
        Non-string identifiers and non-finite amounts count as malformed.
        """
        natives = []
        for raw in data.get("nativeTransfers") or []:
            if not isinstance(raw, dict):
                continue
            try:
                amount = int(raw.get("amount") or 0)
            except (TypeError, ValueError, OverflowError):
                continue
            natives.append(
                NativeTransfer(
                    from_address=_text(raw.get("fromUserAccount")),
                    to_address=_text(raw.get("toUserAccount")),
                    amount=amount,
                )
            )

        assets = []
        for raw in data.get("tokenTransfers") or []:
            if not isinstance(raw, dict):
                continue
            try:
                amount = Decimal(str(raw.get("tokenAmount") or 0))
            except ArithmeticError:
                continue
            if not amount.is_finite():
                continue
            assets.append(
                AssetTransfer(
                    from_address=_text(raw.get("fromUserAccount")),
                    to_address=_text(raw.get("toUserAccount")),
                    mint=_text(raw.get("mint")),
                    amount=amount,
                )
            )

        block_time = data.get("timestamp") or data.get("blockTime")
        try:
            block_time = int(block_time) if isinstance(block_time, (int, float)) else None
        except (ValueError, OverflowError):
            block_time = None
        return cls(
            signature=_text(data.get("signature")),
            block_time=block_time,
            native_transfers=natives,
            asset_transfers=assets,
        )
