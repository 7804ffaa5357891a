"""Administrative operations: reset and database summary."""

import logging
from typing import Callable

from pumploss.domain.models import TradeDirection
from pumploss.domain.views import DatabaseSummary
from pumploss.repositories.protocols import UnitOfWork

logger = logging.getLogger(__name__)


class AdminService:
    """
    Operations outside the financial-correctness contract.

    clear_all_data is destructive and meant for test/reset environments.
    """

    def __init__(self, uow_factory: Callable[[], UnitOfWork]):
        self._uow_factory = uow_factory

    def clear_all_data(self) -> dict[str, int]:
        """Delete every row in every collection; returns deleted counts."""
        with self._uow_factory() as uow:
            deleted = {
                "pnl_events": uow.pnl.delete_all(),
                "ledger_entries": uow.ledger.delete_all(),
                "trades": uow.trades.delete_all(),
                "wallets": uow.wallets.delete_all(),
                "token_metadata": uow.tokens.delete_all(),
                "cache_records": uow.leaderboard_cache.delete_all(),
            }
            uow.commit()

        logger.warning("All data cleared: %s", deleted)
        return deleted

    def database_summary(self, recent_limit: int = 5) -> DatabaseSummary:
        with self._uow_factory() as uow:
            by_direction = uow.trades.count_by_direction()
            return DatabaseSummary(
                total_trades=sum(by_direction.values()),
                buy_trades=by_direction.get(TradeDirection.ACQUIRE, 0),
                sell_trades=by_direction.get(TradeDirection.DISPOSE, 0),
                pending_trades=len(uow.trades.list_pending()),
                ledger_entries=uow.ledger.count(),
                pnl_events=uow.pnl.count(),
                degraded_pnl_events=uow.pnl.count(degraded_only=True),
                wallets=uow.wallets.count(),
                token_metadata=uow.tokens.count(),
                cache_records=uow.leaderboard_cache.count(),
                recent_trades=uow.trades.list_recent(recent_limit),
            )
