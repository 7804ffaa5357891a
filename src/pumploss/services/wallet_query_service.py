"""Read-only wallet and trade queries."""

from decimal import Decimal
from typing import Callable, Optional

from pumploss.core.exceptions import NotFoundError
from pumploss.core.timezone import now_epoch_seconds
from pumploss.domain.models import LeaderboardPeriod, Trade
from pumploss.domain.views import WalletStatsView
from pumploss.repositories.protocols import (
    TradeRepository,
    PnlRepository,
    WalletRepository,
)
from pumploss.services.leaderboard_aggregator import period_threshold


class WalletQueryService:
    """Wallet statistics and trade history for the presentation layer."""

    def __init__(
        self,
        trade_repo: TradeRepository,
        pnl_repo: PnlRepository,
        wallet_repo: WalletRepository,
        clock: Callable[[], float] = now_epoch_seconds,
        page_size: int = 500,
        default_limit: int = 50,
    ):
        self._trade_repo = trade_repo
        self._pnl_repo = pnl_repo
        self._wallet_repo = wallet_repo
        self._clock = clock
        self._page_size = page_size
        self._default_limit = default_limit

    def get_wallet_stats(self, wallet_address: str, include_degraded: bool = True) -> WalletStatsView:
        """
        Realized PNL for 24h, 7d and all time plus activity counters.

        Unknown wallets get an all-zero view. Window bounds use the same
        seconds thresholds as the leaderboard.
        """
        now = self._clock()
        day_since = period_threshold(LeaderboardPeriod.DAY, now)
        week_since = period_threshold(LeaderboardPeriod.WEEK, now)

        stats = WalletStatsView(wallet_address=wallet_address)
        for event in self._pnl_repo.iter_events(
            wallet_address=wallet_address, page_size=self._page_size
        ):
            if not event.cost_basis_known:
                stats.degraded_event_count += 1
                if not include_degraded:
                    continue

            stats.pnl_all_time += event.pnl_quote
            if event.block_time >= week_since:
                stats.pnl_7d += event.pnl_quote
            if event.block_time >= day_since:
                stats.pnl_24h += event.pnl_quote

            if event.is_loss:
                stats.loss_count_all_time += 1
                if event.block_time >= week_since:
                    stats.loss_count_7d += 1
                if event.block_time >= day_since:
                    stats.loss_count_24h += 1
                if event.pnl_quote < stats.biggest_loss:
                    stats.biggest_loss = event.pnl_quote
                    stats.biggest_loss_asset = event.asset_id

        wallet = self._wallet_repo.get(wallet_address)
        if wallet is not None:
            stats.total_trades = wallet.total_trades
            stats.total_volume_quote = Decimal(wallet.total_volume_quote)
            stats.first_seen = wallet.first_seen
            stats.last_seen = wallet.last_seen
        return stats

    def get_wallet_trades(self, wallet_address: str, limit: Optional[int] = None) -> list[Trade]:
        """Newest first."""
        return self._trade_repo.list_by_trader(wallet_address, limit or self._default_limit)

    def get_trade(self, signature: str) -> Trade:
        trade = self._trade_repo.get_by_signature(signature)
        if trade is None:
            raise NotFoundError("Trade", signature)
        return trade

    def get_recent_trades(self, limit: Optional[int] = None) -> list[Trade]:
        """Newest first, across all wallets."""
        return self._trade_repo.list_recent(limit or self._default_limit)
