"""SQLAlchemy implementation of PnlRepository."""

from decimal import Decimal
from typing import Iterator, Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from pumploss.domain.models import RealizedPnlEvent
from pumploss.repositories.sqlalchemy.orm_models import RealizedPnlORM


class SqlAlchemyPnlRepository:
    """SQLAlchemy-backed realized PNL log."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, event: RealizedPnlEvent) -> RealizedPnlEvent:
        """Append a PNL event."""
        orm_event = RealizedPnlORM(
            trade_signature=event.trade_signature,
            wallet_address=event.wallet_address,
            asset_id=event.asset_id,
            quantity_disposed=event.quantity_disposed,
            proceeds_quote=event.proceeds_quote,
            cost_basis_quote=event.cost_basis_quote,
            pnl_quote=event.pnl_quote,
            block_time=event.block_time,
            cost_basis_known=event.cost_basis_known,
        )
        self._db.add(orm_event)
        self._db.flush()
        return self._to_domain(orm_event)

    def get_by_trade(self, trade_signature: str) -> Optional[RealizedPnlEvent]:
        orm_event = (
            self._db.query(RealizedPnlORM)
            .filter(RealizedPnlORM.trade_signature == trade_signature)
            .first()
        )
        return self._to_domain(orm_event) if orm_event else None

    def iter_events(
        self,
        since: Optional[int] = None,
        wallet_address: Optional[str] = None,
        losses_only: bool = False,
        page_size: int = 500,
    ) -> Iterator[RealizedPnlEvent]:
        """Stream events in (block_time, id) order using keyset pagination."""
        last_key: Optional[tuple[int, int]] = None

        while True:
            query = self._db.query(RealizedPnlORM)
            if since is not None:
                query = query.filter(RealizedPnlORM.block_time >= since)
            if wallet_address is not None:
                query = query.filter(RealizedPnlORM.wallet_address == wallet_address)
            if losses_only:
                query = query.filter(RealizedPnlORM.pnl_quote < 0)
            if last_key is not None:
                last_time, last_id = last_key
                query = query.filter(
                    or_(
                        RealizedPnlORM.block_time > last_time,
                        and_(
                            RealizedPnlORM.block_time == last_time,
                            RealizedPnlORM.id > last_id,
                        ),
                    )
                )

            rows = (
                query.order_by(RealizedPnlORM.block_time, RealizedPnlORM.id)
                .limit(page_size)
                .all()
            )
            for row in rows:
                yield self._to_domain(row)

            if len(rows) < page_size:
                return
            last_key = (rows[-1].block_time, rows[-1].id)

    def list_by_wallet(self, wallet_address: str) -> list[RealizedPnlEvent]:
        orm_events = (
            self._db.query(RealizedPnlORM)
            .filter(RealizedPnlORM.wallet_address == wallet_address)
            .order_by(RealizedPnlORM.block_time, RealizedPnlORM.id)
            .all()
        )
        return [self._to_domain(e) for e in orm_events]

    def count(self, degraded_only: bool = False) -> int:
        query = self._db.query(RealizedPnlORM)
        if degraded_only:
            query = query.filter(RealizedPnlORM.cost_basis_known == False)  # noqa: E712
        return query.count()

    def delete_all(self) -> int:
        deleted = self._db.query(RealizedPnlORM).delete()
        self._db.flush()
        return deleted

    @staticmethod
    def _to_domain(orm: RealizedPnlORM) -> RealizedPnlEvent:
        """Convert ORM model to domain model."""
        return RealizedPnlEvent(
            trade_signature=orm.trade_signature,
            wallet_address=orm.wallet_address,
            asset_id=orm.asset_id,
            quantity_disposed=Decimal(str(orm.quantity_disposed)),
            proceeds_quote=Decimal(str(orm.proceeds_quote)),
            cost_basis_quote=Decimal(str(orm.cost_basis_quote)),
            pnl_quote=Decimal(str(orm.pnl_quote)),
            block_time=orm.block_time,
            cost_basis_known=bool(orm.cost_basis_known),
        )
