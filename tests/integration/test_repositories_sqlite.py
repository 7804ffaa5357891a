"""
Integration tests for SQLAlchemy repositories.

Tests cover:
- Trade Log uniqueness, ordering and pending/applied markers
- Ledger upsert, delete and optimistic versioning
- PNL log keyset pagination and filters
- Wallet aggregate counters
- Leaderboard cache records
- Unit of work commit/rollback and error translation
"""

from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from pumploss.core.exceptions import (
    DuplicateTradeError,
    StorageError,
    WriteConflictError,
)
from pumploss.domain.models import (
    LedgerEntry,
    LeaderboardCacheRecord,
    LeaderboardPeriod,
    RealizedPnlEvent,
    TokenMetadata,
    TradeDirection,
)
from pumploss.domain.views import LeaderboardEntry
from pumploss.repositories.sqlalchemy import (
    SqlAlchemyTradeRepository,
    SqlAlchemyLedgerRepository,
    SqlAlchemyPnlRepository,
    SqlAlchemyWalletRepository,
    SqlAlchemyLeaderboardCacheRepository,
    SqlAlchemyTokenMetadataRepository,
    translate_db_error,
)

from tests.conftest import (
    FIXED_NOW,
    TRADER_A,
    TRADER_B,
    MINT_X,
    MINT_Y,
    assert_decimal_equal,
    make_trade,
)


def pnl_event(signature: str, wallet: str = TRADER_A, pnl: str = "-1", block_time: int = FIXED_NOW,
              cost_basis_known: bool = True) -> RealizedPnlEvent:
    return RealizedPnlEvent(
        trade_signature=signature,
        wallet_address=wallet,
        asset_id=MINT_X,
        quantity_disposed=Decimal("10"),
        proceeds_quote=Decimal("1"),
        cost_basis_quote=Decimal("1") - Decimal(pnl),
        pnl_quote=Decimal(pnl),
        block_time=block_time,
        cost_basis_known=cost_basis_known,
    )


# =============================================================================
# TRADE REPOSITORY
# =============================================================================


class TestTradeRepository:
    """Tests for SqlAlchemyTradeRepository."""

    def test_add_and_get(self, trade_repo: SqlAlchemyTradeRepository):
        trade_repo.add(make_trade("sig-1", asset_amount="123.456", quote_amount="1.25"))

        trade = trade_repo.get_by_signature("sig-1")

        assert trade.direction == TradeDirection.ACQUIRE
        assert_decimal_equal(trade.asset_amount, Decimal("123.456"))
        assert_decimal_equal(trade.quote_amount, Decimal("1.25"))
        assert trade.block_time == FIXED_NOW

    def test_duplicate_signature_rejected(self, trade_repo: SqlAlchemyTradeRepository, test_session):
        trade_repo.add(make_trade("sig-1"))
        test_session.commit()

        with pytest.raises(DuplicateTradeError):
            trade_repo.add(make_trade("sig-1"))

    def test_pending_until_marked_applied(self, trade_repo: SqlAlchemyTradeRepository):
        trade_repo.add(make_trade("sig-2", block_time=FIXED_NOW))
        trade_repo.add(make_trade("sig-1", block_time=FIXED_NOW - 5))

        assert [t.signature for t in trade_repo.list_pending()] == ["sig-1", "sig-2"]
        assert [t.signature for t in trade_repo.list_pending(limit=1)] == ["sig-1"]

        trade_repo.mark_applied("sig-1", FIXED_NOW)

        assert trade_repo.is_applied("sig-1")
        assert not trade_repo.is_applied("sig-2")
        assert [t.signature for t in trade_repo.list_pending()] == ["sig-2"]

    def test_double_mark_is_conflict(self, trade_repo: SqlAlchemyTradeRepository, test_session):
        trade_repo.add(make_trade("sig-1"))
        trade_repo.mark_applied("sig-1", FIXED_NOW)
        test_session.commit()
        test_session.expunge_all()

        with pytest.raises(WriteConflictError):
            trade_repo.mark_applied("sig-1", FIXED_NOW + 1)

    def test_counts(self, trade_repo: SqlAlchemyTradeRepository):
        trade_repo.add(make_trade("1", asset_id=MINT_X))
        trade_repo.add(make_trade("2", asset_id=MINT_X, direction=TradeDirection.DISPOSE))
        trade_repo.add(make_trade("3", asset_id=MINT_Y))

        assert trade_repo.count_by_direction() == {
            TradeDirection.ACQUIRE: 2,
            TradeDirection.DISPOSE: 1,
        }
        assert list(trade_repo.count_by_asset().items()) == [(MINT_X, 2), (MINT_Y, 1)]

    def test_list_by_trader_and_recent(self, trade_repo: SqlAlchemyTradeRepository):
        trade_repo.add(make_trade("a1", block_time=FIXED_NOW - 2))
        trade_repo.add(make_trade("b1", trader_address=TRADER_B, block_time=FIXED_NOW - 1))
        trade_repo.add(make_trade("a2", block_time=FIXED_NOW))

        assert [t.signature for t in trade_repo.list_by_trader(TRADER_A, 10)] == ["a2", "a1"]
        assert [t.signature for t in trade_repo.list_recent(2)] == ["a2", "b1"]
        assert [t.signature for t in trade_repo.list_all()] == ["a1", "b1", "a2"]


# =============================================================================
# LEDGER REPOSITORY
# =============================================================================


class TestLedgerRepository:
    """Tests for SqlAlchemyLedgerRepository."""

    def test_save_inserts_then_updates(self, ledger_repo: SqlAlchemyLedgerRepository):
        ledger_repo.save(LedgerEntry(TRADER_A, MINT_X, Decimal("10"), Decimal("0.5"), FIXED_NOW))
        ledger_repo.save(LedgerEntry(TRADER_A, MINT_X, Decimal("4"), Decimal("0.5"), FIXED_NOW + 1))

        entry = ledger_repo.get(TRADER_A, MINT_X)

        assert_decimal_equal(entry.quantity_held, Decimal("4"))
        assert entry.last_updated == FIXED_NOW + 1
        assert ledger_repo.count() == 1

    def test_delete_and_list(self, ledger_repo: SqlAlchemyLedgerRepository):
        ledger_repo.save(LedgerEntry(TRADER_A, MINT_Y, Decimal("1"), Decimal("1"), FIXED_NOW))
        ledger_repo.save(LedgerEntry(TRADER_A, MINT_X, Decimal("1"), Decimal("1"), FIXED_NOW))
        ledger_repo.save(LedgerEntry(TRADER_B, MINT_X, Decimal("1"), Decimal("1"), FIXED_NOW))

        ledger_repo.delete(TRADER_A, MINT_Y)
        ledger_repo.delete(TRADER_A, "missing")

        assert [e.asset_id for e in ledger_repo.list_by_wallet(TRADER_A)] == [MINT_X]
        assert ledger_repo.get(TRADER_A, MINT_Y) is None

    def test_stale_update_is_detected(self, session_factory):
        """
        GIVEN two sessions that read the same position
        WHEN both write it
        THEN the second flush fails with a version conflict
        """
        setup = session_factory()
        SqlAlchemyLedgerRepository(setup).save(
            LedgerEntry(TRADER_A, MINT_X, Decimal("10"), Decimal("1"), FIXED_NOW)
        )
        setup.commit()
        setup.close()

        first = session_factory()
        second = session_factory()
        repo_1 = SqlAlchemyLedgerRepository(first)
        repo_2 = SqlAlchemyLedgerRepository(second)
        repo_1.get(TRADER_A, MINT_X)
        repo_2.get(TRADER_A, MINT_X)

        repo_1.save(LedgerEntry(TRADER_A, MINT_X, Decimal("8"), Decimal("1"), FIXED_NOW))
        first.commit()

        with pytest.raises(StaleDataError):
            repo_2.save(LedgerEntry(TRADER_A, MINT_X, Decimal("5"), Decimal("1"), FIXED_NOW))
        second.rollback()
        first.close()
        second.close()


# =============================================================================
# PNL REPOSITORY
# =============================================================================


class TestPnlRepository:
    """Tests for SqlAlchemyPnlRepository."""

    def test_iter_events_pages_in_time_order(self, pnl_repo: SqlAlchemyPnlRepository):
        for i, t in enumerate([5, 1, 3, 3, 2]):
            pnl_repo.add(pnl_event(f"sig-{i}", block_time=FIXED_NOW + t))

        events = list(pnl_repo.iter_events(page_size=2))

        assert [e.block_time - FIXED_NOW for e in events] == [1, 2, 3, 3, 5]
        # Same block time keeps insertion order
        assert [e.trade_signature for e in events][2:4] == ["sig-2", "sig-3"]

    def test_iter_events_filters(self, pnl_repo: SqlAlchemyPnlRepository):
        pnl_repo.add(pnl_event("old", block_time=FIXED_NOW - 100))
        pnl_repo.add(pnl_event("gain", pnl="2"))
        pnl_repo.add(pnl_event("b-loss", wallet=TRADER_B))
        pnl_repo.add(pnl_event("a-loss"))

        since = [e.trade_signature for e in pnl_repo.iter_events(since=FIXED_NOW)]
        losses = [e.trade_signature for e in pnl_repo.iter_events(losses_only=True)]
        wallet = [e.trade_signature for e in pnl_repo.iter_events(wallet_address=TRADER_B)]

        assert "old" not in since
        assert "gain" not in losses
        assert wallet == ["b-loss"]

    def test_counts_and_lookup(self, pnl_repo: SqlAlchemyPnlRepository):
        pnl_repo.add(pnl_event("a"))
        pnl_repo.add(pnl_event("b", pnl="0", cost_basis_known=False))

        assert pnl_repo.count() == 2
        assert pnl_repo.count(degraded_only=True) == 1
        assert pnl_repo.get_by_trade("b").cost_basis_known is False
        assert pnl_repo.get_by_trade("zzz") is None
        assert [e.trade_signature for e in pnl_repo.list_by_wallet(TRADER_A)] == ["a", "b"]


# =============================================================================
# WALLET, CACHE AND TOKEN REPOSITORIES
# =============================================================================


class TestWalletRepository:
    """Tests for SqlAlchemyWalletRepository."""

    def test_record_trade_accumulates(self, wallet_repo: SqlAlchemyWalletRepository):
        wallet_repo.record_trade(TRADER_A, FIXED_NOW, Decimal("1.5"))
        wallet_repo.record_trade(TRADER_A, FIXED_NOW - 50, Decimal("2"))
        wallet = wallet_repo.record_trade(TRADER_A, FIXED_NOW + 50, Decimal("0.5"))

        assert wallet.total_trades == 3
        assert_decimal_equal(wallet.total_volume_quote, Decimal("4"))
        assert wallet.first_seen == FIXED_NOW - 50
        assert wallet.last_seen == FIXED_NOW + 50
        assert wallet_repo.count() == 1


class TestLeaderboardCacheRepository:
    """Tests for SqlAlchemyLeaderboardCacheRepository."""

    def test_upsert_overwrites_period(self, cache_repo: SqlAlchemyLeaderboardCacheRepository):
        entry = LeaderboardEntry(1, TRADER_A, Decimal("-2.5"), 2, MINT_X, FIXED_NOW, Decimal("-3"))
        cache_repo.upsert(LeaderboardCacheRecord(LeaderboardPeriod.DAY, [entry], FIXED_NOW))
        cache_repo.upsert(LeaderboardCacheRecord(LeaderboardPeriod.DAY, [], FIXED_NOW + 10))
        cache_repo.upsert(LeaderboardCacheRecord(LeaderboardPeriod.ALL, [entry], FIXED_NOW))

        day = cache_repo.get(LeaderboardPeriod.DAY)
        everything = cache_repo.get("all")

        assert day.entries == []
        assert day.last_updated == FIXED_NOW + 10
        assert everything.entries == [entry]
        assert cache_repo.get(LeaderboardPeriod.WEEK) is None
        assert cache_repo.count() == 2


class TestTokenMetadataRepository:
    """Tests for SqlAlchemyTokenMetadataRepository."""

    def test_upsert_and_list(self, token_repo: SqlAlchemyTokenMetadataRepository):
        token_repo.upsert(TokenMetadata(mint=MINT_X, symbol="X"))
        token_repo.upsert(TokenMetadata(mint=MINT_X, symbol="X2", decimals=9))
        token_repo.upsert(TokenMetadata(mint=MINT_Y))

        assert token_repo.get(MINT_X).symbol == "X2"
        assert token_repo.get(MINT_X).decimals == 9
        assert token_repo.list_mints() == {MINT_X, MINT_Y}


# =============================================================================
# UNIT OF WORK
# =============================================================================


class TestUnitOfWork:
    """Tests for SqlAlchemyUnitOfWork."""

    def test_commit_persists(self, uow_factory):
        with uow_factory() as uow:
            uow.trades.add(make_trade("sig-1"))
            uow.commit()

        with uow_factory() as uow:
            assert uow.trades.get_by_signature("sig-1") is not None

    def test_exit_without_commit_rolls_back(self, uow_factory):
        with uow_factory() as uow:
            uow.trades.add(make_trade("sig-1"))

        with uow_factory() as uow:
            assert uow.trades.get_by_signature("sig-1") is None

    def test_sqlalchemy_errors_are_translated(self, uow_factory):
        with pytest.raises(StorageError):
            with uow_factory():
                raise SQLAlchemyError("boom")

    def test_translate_db_error(self):
        locked = OperationalError("UPDATE ledger_entries", {}, Exception("database is locked"))
        other = OperationalError("SELECT 1", {}, Exception("no such table: trades"))

        assert isinstance(translate_db_error(StaleDataError("stale")), WriteConflictError)
        assert isinstance(translate_db_error(locked), WriteConflictError)
        assert isinstance(translate_db_error(other), StorageError)
