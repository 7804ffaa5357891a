"""Repository protocol definitions (interfaces)."""

from pumploss.repositories.protocols.trade_repo import TradeRepository
from pumploss.repositories.protocols.ledger_repo import LedgerRepository
from pumploss.repositories.protocols.pnl_repo import PnlRepository
from pumploss.repositories.protocols.wallet_repo import WalletRepository
from pumploss.repositories.protocols.cache_repo import LeaderboardCacheRepository
from pumploss.repositories.protocols.token_repo import TokenMetadataRepository
from pumploss.repositories.protocols.unit_of_work import UnitOfWork

__all__ = [
    "TradeRepository",
    "LedgerRepository",
    "PnlRepository",
    "WalletRepository",
    "LeaderboardCacheRepository",
    "TokenMetadataRepository",
    "UnitOfWork",
]
