"""Core utilities and shared functionality."""

from pumploss.core.timezone import (
    now_utc,
    now_epoch_seconds,
    to_utc,
    from_epoch_seconds,
    parse_block_time,
    UTC,
)
from pumploss.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    StorageError,
    WriteConflictError,
    TradeProcessingError,
    DuplicateTradeError,
)

__all__ = [
    "now_utc",
    "now_epoch_seconds",
    "to_utc",
    "from_epoch_seconds",
    "parse_block_time",
    "UTC",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "StorageError",
    "WriteConflictError",
    "TradeProcessingError",
    "DuplicateTradeError",
]
