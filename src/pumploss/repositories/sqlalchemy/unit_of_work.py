"""SQLAlchemy unit of work: repositories bound to one session."""

import logging
from typing import Callable

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from pumploss.core.exceptions import AppError, StorageError, WriteConflictError
from pumploss.repositories.sqlalchemy.trade_repo import SqlAlchemyTradeRepository
from pumploss.repositories.sqlalchemy.ledger_repo import SqlAlchemyLedgerRepository
from pumploss.repositories.sqlalchemy.pnl_repo import SqlAlchemyPnlRepository
from pumploss.repositories.sqlalchemy.wallet_repo import SqlAlchemyWalletRepository
from pumploss.repositories.sqlalchemy.cache_repo import SqlAlchemyLeaderboardCacheRepository
from pumploss.repositories.sqlalchemy.token_repo import SqlAlchemyTokenMetadataRepository

logger = logging.getLogger(__name__)

_LOCK_MARKERS = ("database is locked", "database table is locked", "could not serialize")


def translate_db_error(exc: SQLAlchemyError) -> AppError:
    """Map a SQLAlchemy failure onto the application error taxonomy."""
    if isinstance(exc, StaleDataError):
        return WriteConflictError(f"Concurrent ledger update: {exc}")
    if isinstance(exc, OperationalError):
        message = str(exc).lower()
        if any(marker in message for marker in _LOCK_MARKERS):
            return WriteConflictError(f"Store busy: {exc.orig}")
    return StorageError(f"Storage failure: {exc}")


class SqlAlchemyUnitOfWork:
    """
    Open a session, expose the repositories on it, commit once.

    Usage:
        with SqlAlchemyUnitOfWork(session_factory) as uow:
            uow.trades.add(trade)
            uow.commit()

    Leaving the block without commit() rolls back. SQLAlchemy errors raised
    inside the block or by commit() surface as WriteConflictError or
    StorageError.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self._session = None

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self._session = self._session_factory()
        self.trades = SqlAlchemyTradeRepository(self._session)
        self.ledger = SqlAlchemyLedgerRepository(self._session)
        self.pnl = SqlAlchemyPnlRepository(self._session)
        self.wallets = SqlAlchemyWalletRepository(self._session)
        self.leaderboard_cache = SqlAlchemyLeaderboardCacheRepository(self._session)
        self.tokens = SqlAlchemyTokenMetadataRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._session.close()
            self._session = None
        if isinstance(exc, SQLAlchemyError):
            raise translate_db_error(exc) from exc

    def commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            logger.debug("Commit failed: %s", exc)
            self._session.rollback()
            raise translate_db_error(exc) from exc

    def rollback(self) -> None:
        self._session.rollback()


def unit_of_work_factory(session_factory: sessionmaker) -> Callable[[], SqlAlchemyUnitOfWork]:
    """Return a zero-argument factory producing units of work on session_factory."""

    def _factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory)

    return _factory
