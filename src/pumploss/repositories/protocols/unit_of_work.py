"""Unit of work protocol: one atomic set of store changes."""

from typing import Protocol

from pumploss.repositories.protocols.trade_repo import TradeRepository
from pumploss.repositories.protocols.ledger_repo import LedgerRepository
from pumploss.repositories.protocols.pnl_repo import PnlRepository
from pumploss.repositories.protocols.wallet_repo import WalletRepository
from pumploss.repositories.protocols.cache_repo import LeaderboardCacheRepository
from pumploss.repositories.protocols.token_repo import TokenMetadataRepository


class UnitOfWork(Protocol):
    """
    Repositories sharing one transaction.

    Nothing is durable until commit(); leaving the context without
    committing rolls back.
    """

    trades: TradeRepository
    ledger: LedgerRepository
    pnl: PnlRepository
    wallets: WalletRepository
    leaderboard_cache: LeaderboardCacheRepository
    tokens: TokenMetadataRepository

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...
