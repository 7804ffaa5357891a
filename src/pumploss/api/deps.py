"""Dependency injection for FastAPI."""

from typing import Callable

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from pumploss.config.settings import get_settings
from pumploss.core.timezone import now_epoch_seconds
from pumploss.repositories.protocols import UnitOfWork
from pumploss.repositories.sqlalchemy.database import get_db, get_session_factory
from pumploss.repositories.sqlalchemy import (
    SqlAlchemyTradeRepository,
    SqlAlchemyPnlRepository,
    SqlAlchemyWalletRepository,
    unit_of_work_factory,
)
from pumploss.services import (
    KeyedLockArena,
    RetryConfig,
    TradeClassifier,
    AccountingEngine,
    LeaderboardCache,
    IngestionService,
    WalletQueryService,
    TokenMetadataService,
    AdminService,
)


def get_clock() -> Callable[[], float]:
    """Provide the epoch-seconds clock."""
    return now_epoch_seconds


def get_uow_factory() -> Callable[[], UnitOfWork]:
    """Provide a factory of units of work on the configured database."""
    return unit_of_work_factory(get_session_factory())


def get_lock_arena(request: Request) -> KeyedLockArena:
    """Provide the process-wide ledger lock arena held on app.state."""
    return request.app.state.lock_arena


def get_trade_repo(db: Session = Depends(get_db)) -> SqlAlchemyTradeRepository:
    """Provide TradeRepository instance."""
    return SqlAlchemyTradeRepository(db)


def get_pnl_repo(db: Session = Depends(get_db)) -> SqlAlchemyPnlRepository:
    """Provide PnlRepository instance."""
    return SqlAlchemyPnlRepository(db)


def get_wallet_repo(db: Session = Depends(get_db)) -> SqlAlchemyWalletRepository:
    """Provide WalletRepository instance."""
    return SqlAlchemyWalletRepository(db)


def get_trade_classifier() -> TradeClassifier:
    """Provide TradeClassifier configured from settings."""
    return TradeClassifier.from_settings(get_settings())


def get_accounting_engine(
    uow_factory: Callable[[], UnitOfWork] = Depends(get_uow_factory),
    lock_arena: KeyedLockArena = Depends(get_lock_arena),
    clock: Callable[[], float] = Depends(get_clock),
) -> AccountingEngine:
    """Provide AccountingEngine instance."""
    return AccountingEngine(
        uow_factory=uow_factory,
        lock_arena=lock_arena,
        retry_config=RetryConfig.from_settings(get_settings()),
        clock=clock,
    )


def get_ingestion_service(
    classifier: TradeClassifier = Depends(get_trade_classifier),
    engine: AccountingEngine = Depends(get_accounting_engine),
    clock: Callable[[], float] = Depends(get_clock),
) -> IngestionService:
    """Provide IngestionService instance."""
    return IngestionService(classifier=classifier, engine=engine, clock=clock)


def get_leaderboard_cache(
    uow_factory: Callable[[], UnitOfWork] = Depends(get_uow_factory),
    clock: Callable[[], float] = Depends(get_clock),
) -> LeaderboardCache:
    """Provide LeaderboardCache instance."""
    return LeaderboardCache.from_settings(uow_factory, get_settings(), clock=clock)


def get_wallet_query_service(
    trade_repo: SqlAlchemyTradeRepository = Depends(get_trade_repo),
    pnl_repo: SqlAlchemyPnlRepository = Depends(get_pnl_repo),
    wallet_repo: SqlAlchemyWalletRepository = Depends(get_wallet_repo),
    clock: Callable[[], float] = Depends(get_clock),
) -> WalletQueryService:
    """Provide WalletQueryService instance."""
    return WalletQueryService(
        trade_repo=trade_repo,
        pnl_repo=pnl_repo,
        wallet_repo=wallet_repo,
        clock=clock,
        page_size=get_settings().scan_page_size,
        default_limit=get_settings().default_leaderboard_limit,
    )


def get_token_metadata_service(
    uow_factory: Callable[[], UnitOfWork] = Depends(get_uow_factory),
    clock: Callable[[], float] = Depends(get_clock),
) -> TokenMetadataService:
    """Provide TokenMetadataService instance."""
    return TokenMetadataService(uow_factory=uow_factory, clock=clock)


def get_admin_service(
    uow_factory: Callable[[], UnitOfWork] = Depends(get_uow_factory),
) -> AdminService:
    """Provide AdminService instance."""
    return AdminService(uow_factory=uow_factory)
