"""Leaderboard aggregation over the realized PNL log."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from pumploss.core.timezone import now_epoch_seconds
from pumploss.domain.models import LeaderboardPeriod, RealizedPnlEvent
from pumploss.domain.views import LeaderboardEntry
from pumploss.repositories.protocols import PnlRepository

logger = logging.getLogger(__name__)


@dataclass
class _WalletTally:
    total_pnl: Decimal = Decimal("0")
    loss_count: int = 0
    biggest_loss: Decimal = Decimal("0")
    biggest_loss_asset: Optional[str] = None
    last_loss_time: Optional[int] = None

    def add(self, event: RealizedPnlEvent) -> None:
        self.total_pnl += event.pnl_quote
        if not event.is_loss:
            return
        self.loss_count += 1
        if event.pnl_quote < self.biggest_loss:
            self.biggest_loss = event.pnl_quote
            self.biggest_loss_asset = event.asset_id
        if self.last_loss_time is None or event.block_time > self.last_loss_time:
            self.last_loss_time = event.block_time


def period_threshold(period: LeaderboardPeriod, now: float) -> Optional[int]:
    """Lower block_time bound for a period, None for all time."""
    window = LeaderboardPeriod(period).window_seconds
    if window is None:
        return None
    return int(now) - window


class LeaderboardAggregator:
    """
    Rank wallets by realized loss over a time window.

    Read-only: scans the PNL log page by page and never writes.
    """

    def __init__(
        self,
        pnl_repo: PnlRepository,
        clock: Callable[[], float] = now_epoch_seconds,
        page_size: int = 500,
    ):
        self._pnl_repo = pnl_repo
        self._clock = clock
        self._page_size = page_size

    def compute_leaderboard(
        self,
        period: LeaderboardPeriod,
        limit: int = 50,
        include_degraded: bool = True,
    ) -> list[LeaderboardEntry]:
        """
        Compute the loss leaderboard for a period.

        Only wallets with a negative total appear, most negative first.
        Exact ties keep the order in which wallets first appear in the
        scan. Degraded events contribute zero; include_degraded=False
        drops them from the scan altogether.
        """
        period = LeaderboardPeriod(period)
        since = period_threshold(period, self._clock())

        tallies: dict[str, _WalletTally] = {}
        for event in self._pnl_repo.iter_events(since=since, page_size=self._page_size):
            if not include_degraded and not event.cost_basis_known:
                continue
            tallies.setdefault(event.wallet_address, _WalletTally()).add(event)

        losers = [(wallet, tally) for wallet, tally in tallies.items() if tally.total_pnl < 0]
        # sorted() is stable: ties keep first-appearance order
        losers = sorted(losers, key=lambda item: item[1].total_pnl)[: max(limit, 0)]

        if period == LeaderboardPeriod.ALL:
            all_time = {wallet: tally.total_pnl for wallet, tally in losers}
        else:
            all_time = self._all_time_losses({wallet for wallet, _ in losers})

        entries = [
            LeaderboardEntry(
                rank=index + 1,
                wallet_address=wallet,
                pnl_amount=tally.total_pnl,
                loss_trade_count=tally.loss_count,
                biggest_loss_asset=tally.biggest_loss_asset,
                last_loss_time=tally.last_loss_time,
                all_time_loss=all_time.get(wallet, Decimal("0")),
            )
            for index, (wallet, tally) in enumerate(losers)
        ]
        logger.debug(
            "Computed %s leaderboard: %d of %d wallets listed",
            period.value,
            len(entries),
            len(tallies),
        )
        return entries

    def _all_time_losses(self, wallets: set[str]) -> dict[str, Decimal]:
        """Sum every losing event, over all time, for the given wallets."""
        totals: dict[str, Decimal] = {}
        if not wallets:
            return totals
        for event in self._pnl_repo.iter_events(losses_only=True, page_size=self._page_size):
            if event.wallet_address in wallets:
                totals[event.wallet_address] = (
                    totals.get(event.wallet_address, Decimal("0")) + event.pnl_quote
                )
        return totals
