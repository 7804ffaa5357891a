"""Service layer for pumploss."""

from pumploss.services.locking import KeyedLockArena
from pumploss.services.retry import RetryConfig, RetriesExhausted, run_with_retry
from pumploss.services.trade_classifier import (
    TradeClassifier,
    LegRole,
    DirectionRule,
    DIRECTION_TABLE,
)
from pumploss.services.accounting_engine import (
    AccountingEngine,
    apply_acquisition,
    apply_disposal,
)
from pumploss.services.leaderboard_aggregator import LeaderboardAggregator, period_threshold
from pumploss.services.leaderboard_cache import LeaderboardCache
from pumploss.services.ingestion_service import IngestionService, build_direct_trade
from pumploss.services.wallet_query_service import WalletQueryService
from pumploss.services.token_metadata_service import TokenMetadataService
from pumploss.services.admin_service import AdminService

__all__ = [
    "KeyedLockArena",
    "RetryConfig",
    "RetriesExhausted",
    "run_with_retry",
    "TradeClassifier",
    "LegRole",
    "DirectionRule",
    "DIRECTION_TABLE",
    "AccountingEngine",
    "apply_acquisition",
    "apply_disposal",
    "LeaderboardAggregator",
    "period_threshold",
    "LeaderboardCache",
    "IngestionService",
    "build_direct_trade",
    "WalletQueryService",
    "TokenMetadataService",
    "AdminService",
]
