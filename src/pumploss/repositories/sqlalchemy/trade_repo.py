"""SQLAlchemy implementation of TradeRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pumploss.core.exceptions import DuplicateTradeError, WriteConflictError
from pumploss.domain.models import Trade, TradeDirection
from pumploss.repositories.sqlalchemy.orm_models import TradeORM, TradeApplicationORM


class SqlAlchemyTradeRepository:
    """SQLAlchemy-backed Trade Log."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, trade: Trade) -> Trade:
        """Append a trade; the unique signature index rejects duplicates."""
        orm_trade = self._to_orm(trade)
        self._db.add(orm_trade)
        try:
            self._db.flush()
        except IntegrityError as exc:
            raise DuplicateTradeError(trade.signature) from exc
        return self._to_domain(orm_trade)

    def get_by_signature(self, signature: str) -> Optional[Trade]:
        """Retrieve trade by signature."""
        orm_trade = self._db.query(TradeORM).filter(
            TradeORM.signature == signature
        ).first()
        return self._to_domain(orm_trade) if orm_trade else None

    def list_by_trader(self, trader_address: str, limit: int) -> list[Trade]:
        """List a wallet's trades, newest first."""
        query = (
            self._db.query(TradeORM)
            .filter(TradeORM.trader_address == trader_address)
            .order_by(TradeORM.block_time.desc(), TradeORM.id.desc())
            .limit(limit)
        )
        return [self._to_domain(t) for t in query.all()]

    def list_recent(self, limit: int) -> list[Trade]:
        """List trades across all wallets, newest first."""
        query = (
            self._db.query(TradeORM)
            .order_by(TradeORM.block_time.desc(), TradeORM.id.desc())
            .limit(limit)
        )
        return [self._to_domain(t) for t in query.all()]

    def list_all(self) -> list[Trade]:
        """List every trade in block time order."""
        query = self._db.query(TradeORM).order_by(TradeORM.block_time, TradeORM.id)
        return [self._to_domain(t) for t in query.all()]

    def count_by_direction(self) -> dict[TradeDirection, int]:
        """Count trades per direction."""
        rows = (
            self._db.query(TradeORM.direction, func.count(TradeORM.id))
            .group_by(TradeORM.direction)
            .all()
        )
        counts = {direction: 0 for direction in TradeDirection}
        for direction, count in rows:
            counts[TradeDirection(direction)] = count
        return counts

    def count_by_asset(self) -> dict[str, int]:
        """Count trades per asset mint, most traded first."""
        rows = (
            self._db.query(TradeORM.asset_id, func.count(TradeORM.id))
            .group_by(TradeORM.asset_id)
            .order_by(func.count(TradeORM.id).desc(), TradeORM.asset_id)
            .all()
        )
        return {asset_id: count for asset_id, count in rows}

    def mark_applied(self, signature: str, applied_at: float) -> None:
        """Record that the trade's ledger effects are committed."""
        self._db.add(TradeApplicationORM(signature=signature, applied_at=applied_at))
        try:
            self._db.flush()
        except IntegrityError as exc:
            raise WriteConflictError(f"Trade {signature} applied concurrently") from exc

    def is_applied(self, signature: str) -> bool:
        """Check whether the trade's ledger effects are committed."""
        return (
            self._db.query(TradeApplicationORM.signature)
            .filter(TradeApplicationORM.signature == signature)
            .first()
            is not None
        )

    def list_pending(self, limit: Optional[int] = None) -> list[Trade]:
        """List logged trades whose ledger effects never committed."""
        query = (
            self._db.query(TradeORM)
            .outerjoin(
                TradeApplicationORM,
                TradeApplicationORM.signature == TradeORM.signature,
            )
            .filter(TradeApplicationORM.signature.is_(None))
            .order_by(TradeORM.block_time, TradeORM.id)
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_domain(t) for t in query.all()]

    def delete_all(self) -> int:
        """Delete every trade and application marker."""
        self._db.query(TradeApplicationORM).delete()
        deleted = self._db.query(TradeORM).delete()
        self._db.flush()
        return deleted

    @staticmethod
    def _to_orm(trade: Trade) -> TradeORM:
        """Convert domain model to ORM model."""
        return TradeORM(
            signature=trade.signature,
            block_time=trade.block_time,
            trader_address=trade.trader_address,
            asset_id=trade.asset_id,
            direction=trade.direction,
            asset_amount=trade.asset_amount,
            quote_amount=trade.quote_amount,
            direction_confidence=trade.direction_confidence,
            classification_case=trade.classification_case,
        )

    @staticmethod
    def _to_domain(orm: TradeORM) -> Trade:
        """Convert ORM model to domain model."""
        return Trade(
            signature=orm.signature,
            block_time=orm.block_time,
            trader_address=orm.trader_address,
            asset_id=orm.asset_id,
            direction=orm.direction,
            asset_amount=Decimal(str(orm.asset_amount)),
            quote_amount=Decimal(str(orm.quote_amount)),
            direction_confidence=orm.direction_confidence,
            classification_case=orm.classification_case,
        )
