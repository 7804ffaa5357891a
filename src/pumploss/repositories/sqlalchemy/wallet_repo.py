"""SQLAlchemy implementation of WalletRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import case
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pumploss.core.exceptions import WriteConflictError
from pumploss.domain.models import WalletAggregate
from pumploss.repositories.sqlalchemy.orm_models import WalletORM


class SqlAlchemyWalletRepository:
    """SQLAlchemy-backed wallet aggregates."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, address: str) -> Optional[WalletAggregate]:
        orm_wallet = self._db.query(WalletORM).filter(WalletORM.address == address).first()
        return self._to_domain(orm_wallet) if orm_wallet else None

    def record_trade(
        self,
        address: str,
        block_time: int,
        quote_amount: Decimal,
    ) -> WalletAggregate:
        """
        Bump counters with a single UPDATE so concurrent trades for the same
        wallet (different assets) never lose an increment.
        """
        updated = (
            self._db.query(WalletORM)
            .filter(WalletORM.address == address)
            .update(
                {
                    WalletORM.total_trades: WalletORM.total_trades + 1,
                    WalletORM.total_volume_quote: WalletORM.total_volume_quote + quote_amount,
                    WalletORM.last_seen: case(
                        (WalletORM.last_seen < block_time, block_time),
                        else_=WalletORM.last_seen,
                    ),
                    WalletORM.first_seen: case(
                        (WalletORM.first_seen > block_time, block_time),
                        else_=WalletORM.first_seen,
                    ),
                },
                synchronize_session=False,
            )
        )
        if not updated:
            self._db.add(
                WalletORM(
                    address=address,
                    first_seen=block_time,
                    last_seen=block_time,
                    total_trades=1,
                    total_volume_quote=quote_amount,
                )
            )
            try:
                self._db.flush()
            except IntegrityError as exc:
                raise WriteConflictError(f"Wallet {address} created concurrently") from exc

        self._db.expire_all()
        return self.get(address)

    def count(self) -> int:
        return self._db.query(WalletORM).count()

    def delete_all(self) -> int:
        deleted = self._db.query(WalletORM).delete()
        self._db.flush()
        return deleted

    @staticmethod
    def _to_domain(orm: WalletORM) -> WalletAggregate:
        """Convert ORM model to domain model."""
        return WalletAggregate(
            address=orm.address,
            first_seen=orm.first_seen,
            last_seen=orm.last_seen,
            total_trades=orm.total_trades,
            total_volume_quote=Decimal(str(orm.total_volume_quote or 0)),
        )
