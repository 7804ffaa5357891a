"""
Pytest configuration and fixtures for the swap-loss ledger tests.

This module provides:
- In-memory SQLite database fixtures (file-backed for thread tests)
- A controllable epoch-seconds clock
- Factory helpers for trades and transport payloads
- Service and repository fixtures
"""

from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from pumploss.main import app
from pumploss.api.deps import get_clock, get_uow_factory
from pumploss.config.settings import Settings, set_settings, reset_settings
from pumploss.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from pumploss.repositories.sqlalchemy import orm_models  # noqa: F401
from pumploss.repositories.sqlalchemy import (
    SqlAlchemyTradeRepository,
    SqlAlchemyLedgerRepository,
    SqlAlchemyPnlRepository,
    SqlAlchemyWalletRepository,
    SqlAlchemyLeaderboardCacheRepository,
    SqlAlchemyTokenMetadataRepository,
    unit_of_work_factory,
)
from pumploss.services import (
    KeyedLockArena,
    RetryConfig,
    TradeClassifier,
    AccountingEngine,
    LeaderboardAggregator,
    LeaderboardCache,
    IngestionService,
    WalletQueryService,
    TokenMetadataService,
    AdminService,
)
from pumploss.csv import CsvImporter, CsvExporter
from pumploss.config.settings import DEFAULT_PROTOCOL_ADDRESSES
from pumploss.domain.models import Trade, TradeDirection


# =============================================================================
# CONSTANTS
# =============================================================================

# 2024-06-15 14:30:00 UTC
FIXED_NOW = 1718461800

LAMPORTS_PER_SOL = 10**9

TRADER_A = "TraderAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"
TRADER_B = "TraderBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBBB"
TRADER_C = "TraderCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCCC"
POOL_SOL_VAULT = "PoolSo1VaultPPPPPPPPPPPPPPPPPPPPPPPPPPPPPPP"
POOL_AUTHORITY = "PoolAuthorityQQQQQQQQQQQQQQQQQQQQQQQQQQQQQQ"
MINT_X = "MintXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXpump"
MINT_Y = "MintYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYpump"

SYSTEM_PROGRAM = "11111111111111111111111111111111"


# =============================================================================
# CLOCK
# =============================================================================


class FakeClock:
    """Epoch-seconds clock that only moves when told to."""

    def __init__(self, now: float = FIXED_NOW):
        self.now = float(now)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock fixed at FIXED_NOW."""
    return FakeClock()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def file_engine(tmp_path):
    """File-backed SQLite engine for tests that write from several threads."""
    reset_settings()

    engine = create_engine(
        f"sqlite:///{tmp_path / 'pumploss-test.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=test_engine
    )


@pytest.fixture(scope="function")
def test_session(session_factory) -> Session:
    """Create test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def uow_factory(session_factory):
    """Factory of units of work on the test database."""
    return unit_of_work_factory(session_factory)


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def trade_repo(test_session) -> SqlAlchemyTradeRepository:
    """Provide test TradeRepository."""
    return SqlAlchemyTradeRepository(test_session)


@pytest.fixture
def ledger_repo(test_session) -> SqlAlchemyLedgerRepository:
    """Provide test LedgerRepository."""
    return SqlAlchemyLedgerRepository(test_session)


@pytest.fixture
def pnl_repo(test_session) -> SqlAlchemyPnlRepository:
    """Provide test PnlRepository."""
    return SqlAlchemyPnlRepository(test_session)


@pytest.fixture
def wallet_repo(test_session) -> SqlAlchemyWalletRepository:
    """Provide test WalletRepository."""
    return SqlAlchemyWalletRepository(test_session)


@pytest.fixture
def cache_repo(test_session) -> SqlAlchemyLeaderboardCacheRepository:
    """Provide test LeaderboardCacheRepository."""
    return SqlAlchemyLeaderboardCacheRepository(test_session)


@pytest.fixture
def token_repo(test_session) -> SqlAlchemyTokenMetadataRepository:
    """Provide test TokenMetadataRepository."""
    return SqlAlchemyTokenMetadataRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def retry_config() -> RetryConfig:
    """Fast, deterministic retries."""
    return RetryConfig(max_attempts=3, base_delay=0.0, max_delay=0.0, jitter=False)


@pytest.fixture
def classifier() -> TradeClassifier:
    """Provide TradeClassifier with the default [1, 100] SOL window."""
    return TradeClassifier(
        min_native_amount=Decimal("1"),
        max_native_amount=Decimal("100"),
        native_decimals=9,
        protocol_addresses=DEFAULT_PROTOCOL_ADDRESSES,
    )


@pytest.fixture
def accounting_engine(uow_factory, retry_config, fake_clock) -> AccountingEngine:
    """Provide test AccountingEngine."""
    return AccountingEngine(
        uow_factory=uow_factory,
        lock_arena=KeyedLockArena(),
        retry_config=retry_config,
        clock=fake_clock,
        sleep=lambda seconds: None,
    )


@pytest.fixture
def ingestion_service(classifier, accounting_engine, fake_clock) -> IngestionService:
    """Provide test IngestionService."""
    return IngestionService(classifier=classifier, engine=accounting_engine, clock=fake_clock)


@pytest.fixture
def aggregator(pnl_repo, fake_clock) -> LeaderboardAggregator:
    """Provide test LeaderboardAggregator with a small page size."""
    return LeaderboardAggregator(pnl_repo, clock=fake_clock, page_size=2)


@pytest.fixture
def leaderboard_cache(uow_factory, fake_clock) -> LeaderboardCache:
    """Provide test LeaderboardCache (120s TTL)."""
    return LeaderboardCache(uow_factory, clock=fake_clock, ttl_seconds=120, internal_limit=1000)


@pytest.fixture
def wallet_query_service(trade_repo, pnl_repo, wallet_repo, fake_clock) -> WalletQueryService:
    """Provide test WalletQueryService."""
    return WalletQueryService(
        trade_repo=trade_repo,
        pnl_repo=pnl_repo,
        wallet_repo=wallet_repo,
        clock=fake_clock,
    )


@pytest.fixture
def token_service(uow_factory, fake_clock) -> TokenMetadataService:
    """Provide test TokenMetadataService."""
    return TokenMetadataService(uow_factory=uow_factory, clock=fake_clock)


@pytest.fixture
def admin_service(uow_factory) -> AdminService:
    """Provide test AdminService."""
    return AdminService(uow_factory=uow_factory)


@pytest.fixture
def csv_importer(ingestion_service) -> CsvImporter:
    """Provide test CsvImporter."""
    return CsvImporter(ingestion_service=ingestion_service)


@pytest.fixture
def csv_exporter(uow_factory) -> CsvExporter:
    """Provide test CsvExporter."""
    return CsvExporter(uow_factory=uow_factory)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def apply(accounting_engine) -> Callable:
    """Apply a trade built from keyword arguments."""

    def _apply(**kwargs):
        return accounting_engine.apply_trade(make_trade(**kwargs))

    return _apply


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine, session_factory, fake_clock) -> TestClient:
    """Provide FastAPI test client with test database and fake clock."""
    # Startup runs init_db against settings; keep it off the real data dir
    set_settings(Settings(database_url="sqlite:///:memory:"))
    reset_database()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_uow_factory] = lambda: unit_of_work_factory(session_factory)
    app.dependency_overrides[get_clock] = lambda: fake_clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


# =============================================================================
# CSV FIXTURES
# =============================================================================


@pytest.fixture
def temp_csv_file(tmp_path) -> str:
    """Provide a temporary CSV file path."""
    return str(tmp_path / "trades.csv")


@pytest.fixture
def sample_csv_content() -> str:
    """Sample valid CSV content for import testing."""
    return f"""signature,block_time,trader_address,asset_id,direction,asset_amount,quote_amount
sig-csv-1,{FIXED_NOW - 300},{TRADER_A},{MINT_X},BUY,1000,1.5
sig-csv-2,2024-06-15T14:26:00Z,{TRADER_A},{MINT_X},BUY,500,1.0
sig-csv-3,{FIXED_NOW - 60},{TRADER_A},{MINT_X},SELL,800,1.2
"""


@pytest.fixture
def invalid_csv_content() -> str:
    """Sample CSV content with errors for testing error handling."""
    return f"""signature,block_time,trader_address,asset_id,direction,asset_amount,quote_amount
sig-ok,{FIXED_NOW},{TRADER_A},{MINT_X},BUY,100,2
sig-bad-dir,{FIXED_NOW},{TRADER_A},{MINT_X},HOLD,100,2
sig-bad-amount,{FIXED_NOW},{TRADER_A},{MINT_X},BUY,not_a_number,2
,{FIXED_NOW},{TRADER_A},{MINT_X},BUY,100,2
sig-bad-time,yesterday-ish,{TRADER_A},{MINT_X},SELL,100,2
"""


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.0001"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(actual) - Decimal(expected))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


def make_trade(
    signature: str,
    direction: TradeDirection = TradeDirection.ACQUIRE,
    asset_amount: Decimal = Decimal("1000"),
    quote_amount: Decimal = Decimal("1.5"),
    trader_address: str = TRADER_A,
    asset_id: str = MINT_X,
    block_time: int = FIXED_NOW,
) -> Trade:
    """Helper to build a directly classified Trade."""
    return Trade(
        signature=signature,
        block_time=block_time,
        trader_address=trader_address,
        asset_id=asset_id,
        direction=TradeDirection(direction),
        asset_amount=Decimal(str(asset_amount)),
        quote_amount=Decimal(str(quote_amount)),
    )


def make_swap_payload(
    signature: str,
    direction: str = "BUY",
    sol: Decimal = Decimal("1.5"),
    tokens: Decimal = Decimal("1000"),
    trader: str = TRADER_A,
    mint: str = MINT_X,
    sol_vault: str = POOL_SOL_VAULT,
    pool_authority: str = POOL_AUTHORITY,
    block_time: Optional[int] = FIXED_NOW,
) -> dict:
    """
    Helper to build an enhanced-transaction payload for a simple swap.

    BUY: trader sends SOL to the pool vault and receives tokens from the
    pool authority. SELL: the reverse. Only the trader is party to both legs.
    """
    lamports = int(Decimal(str(sol)) * LAMPORTS_PER_SOL)
    if direction == "BUY":
        native = {"fromUserAccount": trader, "toUserAccount": sol_vault, "amount": lamports}
        token = {"fromUserAccount": pool_authority, "toUserAccount": trader, "mint": mint, "tokenAmount": float(tokens)}
    else:
        native = {"fromUserAccount": sol_vault, "toUserAccount": trader, "amount": lamports}
        token = {"fromUserAccount": trader, "toUserAccount": pool_authority, "mint": mint, "tokenAmount": float(tokens)}

    payload = {
        "signature": signature,
        "type": "SWAP",
        "nativeTransfers": [native],
        "tokenTransfers": [token],
    }
    if block_time is not None:
        payload["timestamp"] = block_time
    return payload
