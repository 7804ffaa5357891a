"""SQLAlchemy ORM model definitions."""

from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Column,
    Float,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Enum as SqlEnum,
)

from pumploss.repositories.sqlalchemy.database import Base
from pumploss.domain.models.enums import (
    TradeDirection,
    DirectionConfidence,
    ClassificationCase,
    LeaderboardPeriod,
)

# Token amounts can be large and quote amounts small; keep both ends
AMOUNT = Numeric(precision=38, scale=18)


class TradeORM(Base):
    """SQLAlchemy model for Trade (append-only Trade Log)."""

    __tablename__ = "trades"

    id = Column(Integer, primary_key=True, autoincrement=True)
    signature = Column(String(128), unique=True, nullable=False)
    block_time = Column(Integer, nullable=False)
    trader_address = Column(String(64), nullable=False)
    asset_id = Column(String(64), nullable=False)
    direction = Column(SqlEnum(TradeDirection), nullable=False)
    asset_amount = Column(AMOUNT, nullable=False)
    quote_amount = Column(AMOUNT, nullable=False)
    direction_confidence = Column(
        SqlEnum(DirectionConfidence),
        nullable=False,
        default=DirectionConfidence.EXACT,
    )
    classification_case = Column(
        SqlEnum(ClassificationCase),
        nullable=False,
        default=ClassificationCase.DIRECT,
    )

    __table_args__ = (
        Index("ix_trades_trader", "trader_address"),
        Index("ix_trades_block_time", "block_time"),
        Index("ix_trades_trader_asset", "trader_address", "asset_id"),
    )


class TradeApplicationORM(Base):
    """Marks a Trade as applied to the ledger (written with the ledger change)."""

    __tablename__ = "trade_applications"

    signature = Column(String(128), primary_key=True)
    applied_at = Column(Float, nullable=False)


class LedgerEntryORM(Base):
    """SQLAlchemy model for LedgerEntry (open WAC position)."""

    __tablename__ = "ledger_entries"

    wallet_address = Column(String(64), primary_key=True)
    asset_id = Column(String(64), primary_key=True)
    quantity_held = Column(AMOUNT, nullable=False)
    weighted_avg_cost = Column(AMOUNT, nullable=False)
    last_updated = Column(Integer, nullable=False)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (Index("ix_ledger_entries_wallet", "wallet_address"),)


class RealizedPnlORM(Base):
    """SQLAlchemy model for RealizedPnlEvent (append-only PNL Log)."""

    __tablename__ = "realized_pnl"

    id = Column(Integer, primary_key=True, autoincrement=True)
    trade_signature = Column(String(128), unique=True, nullable=False)
    wallet_address = Column(String(64), nullable=False)
    asset_id = Column(String(64), nullable=False)
    quantity_disposed = Column(AMOUNT, nullable=False)
    proceeds_quote = Column(AMOUNT, nullable=False)
    cost_basis_quote = Column(AMOUNT, nullable=False)
    pnl_quote = Column(AMOUNT, nullable=False)
    block_time = Column(Integer, nullable=False)
    cost_basis_known = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("ix_realized_pnl_wallet", "wallet_address"),
        Index("ix_realized_pnl_block_time", "block_time"),
        Index("ix_realized_pnl_wallet_time", "wallet_address", "block_time"),
    )


class WalletORM(Base):
    """SQLAlchemy model for WalletAggregate."""

    __tablename__ = "wallets"

    address = Column(String(64), primary_key=True)
    first_seen = Column(Integer, nullable=False)
    last_seen = Column(Integer, nullable=False)
    total_trades = Column(Integer, nullable=False, default=0)
    total_volume_quote = Column(AMOUNT, nullable=False, default=Decimal("0"))


class LeaderboardCacheORM(Base):
    """SQLAlchemy model for LeaderboardCacheRecord."""

    __tablename__ = "leaderboard_cache"

    period = Column(SqlEnum(LeaderboardPeriod), primary_key=True)
    data_json = Column(Text, nullable=False)
    last_updated = Column(Float, nullable=False)


class TokenMetadataORM(Base):
    """SQLAlchemy model for TokenMetadata."""

    __tablename__ = "token_metadata"

    mint = Column(String(64), primary_key=True)
    symbol = Column(String(32), nullable=True)
    name = Column(String(255), nullable=True)
    decimals = Column(Integer, nullable=False, default=6)
    logo_uri = Column(Text, nullable=True)
    last_updated = Column(Float, nullable=True)
