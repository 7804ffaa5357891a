"""View models for leaderboard and wallet statistics."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class LeaderboardEntry:
    """One ranked wallet in the loss leaderboard."""

    rank: int
    wallet_address: str
    pnl_amount: Decimal
    loss_trade_count: int
    biggest_loss_asset: Optional[str]
    last_loss_time: Optional[int]
    all_time_loss: Decimal

    def to_dict(self) -> dict:
        """Convert to a JSON-safe dict for cache storage."""
        return {
            "rank": self.rank,
            "walletAddress": self.wallet_address,
            "pnlAmount": str(self.pnl_amount),
            "lossTradeCount": self.loss_trade_count,
            "biggestLossAsset": self.biggest_loss_asset,
            "lastLossTime": self.last_loss_time,
            "allTimeLoss": str(self.all_time_loss),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LeaderboardEntry":
        return cls(
            rank=int(data["rank"]),
            wallet_address=data["walletAddress"],
            pnl_amount=Decimal(data["pnlAmount"]),
            loss_trade_count=int(data["lossTradeCount"]),
            biggest_loss_asset=data.get("biggestLossAsset"),
            last_loss_time=data.get("lastLossTime"),
            all_time_loss=Decimal(data["allTimeLoss"]),
        )


@dataclass
class WalletStatsView:
    """Aggregate realized PNL and activity for one wallet."""

    wallet_address: str
    pnl_24h: Decimal = field(default_factory=lambda: Decimal("0"))
    pnl_7d: Decimal = field(default_factory=lambda: Decimal("0"))
    pnl_all_time: Decimal = field(default_factory=lambda: Decimal("0"))
    loss_count_24h: int = 0
    loss_count_7d: int = 0
    loss_count_all_time: int = 0
    biggest_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    biggest_loss_asset: Optional[str] = None
    degraded_event_count: int = 0
    total_trades: int = 0
    total_volume_quote: Decimal = field(default_factory=lambda: Decimal("0"))
    first_seen: Optional[int] = None
    last_seen: Optional[int] = None
