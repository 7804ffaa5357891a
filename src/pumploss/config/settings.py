"""Application settings and configuration."""

from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Program and system accounts that can never be the trader side of a swap
DEFAULT_PROTOCOL_ADDRESSES = [
    "11111111111111111111111111111111",  # System program
    "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA",  # SPL token program
    "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb",  # Token-2022 program
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL",  # Associated token program
    "ComputeBudget111111111111111111111111111111",
    "So11111111111111111111111111111111111111112",  # Wrapped SOL mint
    "pAMMBay6oceH9fJKBRHGP5D4bD4sWpmSwMn52FMfXEA",  # PumpSwap AMM
]


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".pumploss"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Pump Loss Leaderboard"
    app_version: str = "0.1.0"

    # Data directory (SQLite file lives here unless database_url is set)
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None
    sqlite_busy_timeout_seconds: float = 30.0

    log_level: str = "INFO"

    # Trade classification policy
    monitored_program_id: str = "pAMMBay6oceH9fJKBRHGP5D4bD4sWpmSwMn52FMfXEA"
    min_native_amount: Decimal = Decimal("1")
    max_native_amount: Decimal = Decimal("100")
    native_decimals: int = 9
    protocol_addresses: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PROTOCOL_ADDRESSES)
    )

    # Leaderboard
    leaderboard_cache_ttl_seconds: int = 120
    leaderboard_cache_size: int = 1000
    default_leaderboard_limit: int = 50
    scan_page_size: int = 500

    # Accounting engine write-conflict retries
    ledger_max_attempts: int = 5
    ledger_retry_base_delay_seconds: float = 0.05
    ledger_retry_max_delay_seconds: float = 1.0

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "pumploss.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (used by scripts and tests)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
