"""Application context for in-process service management.

Provides access to all services without HTTP. Used by the scheduled
leaderboard refresh and the CSV backfill scripts.
"""

from pathlib import Path
from typing import Callable, Optional

from pumploss.config.settings import Settings, set_settings, get_settings
from pumploss.core.timezone import now_epoch_seconds
from pumploss.repositories.sqlalchemy.database import (
    init_db,
    reset_database,
    get_session,
    get_session_factory,
)
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
from pumploss.csv import CsvImporter, CsvExporter


class AppContext:
    """
    Application context providing in-process access to all services.

    Owns the lock arena for its process, so every engine it hands out
    serializes ledger writes on the same keys.
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        database_url: Optional[str] = None,
        clock: Callable[[], float] = now_epoch_seconds,
    ):
        self._data_dir = data_dir
        self._database_url = database_url
        self._clock = clock
        self._session = None
        self._initialized = False
        self._lock_arena = KeyedLockArena()

        # Service instances (lazy initialized)
        self._engine: Optional[AccountingEngine] = None
        self._ingestion: Optional[IngestionService] = None
        self._leaderboard: Optional[LeaderboardCache] = None

    def initialize(self) -> None:
        """Apply settings and create tables on the configured database."""
        overrides = {}
        if self._data_dir is not None:
            overrides["data_dir"] = self._data_dir
        if self._database_url is not None:
            overrides["database_url"] = self._database_url
        settings = Settings(**overrides)
        set_settings(settings)

        reset_database()
        init_db()

        self._session = None
        self._engine = None
        self._ingestion = None
        self._leaderboard = None
        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def settings(self) -> Settings:
        return get_settings()

    @property
    def uow_factory(self):
        return unit_of_work_factory(get_session_factory())

    def _get_session(self):
        """Get or create the read session."""
        if self._session is None:
            self._session = get_session()
        return self._session

    # Service accessors
    @property
    def engine(self) -> AccountingEngine:
        if self._engine is None:
            self._engine = AccountingEngine(
                uow_factory=self.uow_factory,
                lock_arena=self._lock_arena,
                retry_config=RetryConfig.from_settings(self.settings),
                clock=self._clock,
            )
        return self._engine

    @property
    def ingestion(self) -> IngestionService:
        if self._ingestion is None:
            self._ingestion = IngestionService(
                classifier=TradeClassifier.from_settings(self.settings),
                engine=self.engine,
                clock=self._clock,
            )
        return self._ingestion

    @property
    def leaderboard(self) -> LeaderboardCache:
        if self._leaderboard is None:
            self._leaderboard = LeaderboardCache.from_settings(
                self.uow_factory, self.settings, clock=self._clock
            )
        return self._leaderboard

    @property
    def wallet_queries(self) -> WalletQueryService:
        """Read service on the context's session; call refresh_session() to see new writes."""
        session = self._get_session()
        return WalletQueryService(
            trade_repo=SqlAlchemyTradeRepository(session),
            pnl_repo=SqlAlchemyPnlRepository(session),
            wallet_repo=SqlAlchemyWalletRepository(session),
            clock=self._clock,
            page_size=self.settings.scan_page_size,
            default_limit=self.settings.default_leaderboard_limit,
        )

    @property
    def tokens(self) -> TokenMetadataService:
        return TokenMetadataService(uow_factory=self.uow_factory, clock=self._clock)

    @property
    def admin(self) -> AdminService:
        return AdminService(uow_factory=self.uow_factory)

    # CSV utilities
    @property
    def csv_importer(self) -> CsvImporter:
        return CsvImporter(ingestion_service=self.ingestion)

    @property
    def csv_exporter(self) -> CsvExporter:
        return CsvExporter(uow_factory=self.uow_factory)

    def refresh_session(self) -> None:
        if self._session:
            self._session.close()
        self._session = None

    def close(self) -> None:
        """Clean up resources."""
        if self._session:
            self._session.close()
            self._session = None
        reset_database()
