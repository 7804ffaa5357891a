"""SQLAlchemy repository implementations."""

from pumploss.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    reset_database,
    Base,
)
from pumploss.repositories.sqlalchemy.trade_repo import SqlAlchemyTradeRepository
from pumploss.repositories.sqlalchemy.ledger_repo import SqlAlchemyLedgerRepository
from pumploss.repositories.sqlalchemy.pnl_repo import SqlAlchemyPnlRepository
from pumploss.repositories.sqlalchemy.wallet_repo import SqlAlchemyWalletRepository
from pumploss.repositories.sqlalchemy.cache_repo import SqlAlchemyLeaderboardCacheRepository
from pumploss.repositories.sqlalchemy.token_repo import SqlAlchemyTokenMetadataRepository
from pumploss.repositories.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    unit_of_work_factory,
    translate_db_error,
)

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyTradeRepository",
    "SqlAlchemyLedgerRepository",
    "SqlAlchemyPnlRepository",
    "SqlAlchemyWalletRepository",
    "SqlAlchemyLeaderboardCacheRepository",
    "SqlAlchemyTokenMetadataRepository",
    "SqlAlchemyUnitOfWork",
    "unit_of_work_factory",
    "translate_db_error",
]
