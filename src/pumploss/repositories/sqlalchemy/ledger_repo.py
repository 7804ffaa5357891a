"""SQLAlchemy implementation of LedgerRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pumploss.core.exceptions import WriteConflictError
from pumploss.domain.models import LedgerEntry
from pumploss.repositories.sqlalchemy.orm_models import LedgerEntryORM


class SqlAlchemyLedgerRepository:
    """
    SQLAlchemy-backed Ledger Store.

    Rows carry a version counter; an update or delete against a row that
    another writer changed since it was read fails at flush time.
    """

    def __init__(self, db: Session):
        self._db = db

    def get(self, wallet_address: str, asset_id: str) -> Optional[LedgerEntry]:
        orm_entry = self._get_orm(wallet_address, asset_id)
        return self._to_domain(orm_entry) if orm_entry else None

    def save(self, entry: LedgerEntry) -> LedgerEntry:
        """Insert or update a position."""
        orm_entry = self._get_orm(entry.wallet_address, entry.asset_id)

        if orm_entry:
            orm_entry.quantity_held = entry.quantity_held
            orm_entry.weighted_avg_cost = entry.weighted_avg_cost
            orm_entry.last_updated = entry.last_updated
        else:
            orm_entry = LedgerEntryORM(
                wallet_address=entry.wallet_address,
                asset_id=entry.asset_id,
                quantity_held=entry.quantity_held,
                weighted_avg_cost=entry.weighted_avg_cost,
                last_updated=entry.last_updated,
            )
            self._db.add(orm_entry)

        try:
            self._db.flush()
        except IntegrityError as exc:
            raise WriteConflictError(
                f"Position {entry.wallet_address}/{entry.asset_id} created concurrently"
            ) from exc
        return self._to_domain(orm_entry)

    def delete(self, wallet_address: str, asset_id: str) -> None:
        """Remove a fully exited position."""
        orm_entry = self._get_orm(wallet_address, asset_id)
        if orm_entry:
            self._db.delete(orm_entry)
            self._db.flush()

    def list_by_wallet(self, wallet_address: str) -> list[LedgerEntry]:
        orm_entries = (
            self._db.query(LedgerEntryORM)
            .filter(LedgerEntryORM.wallet_address == wallet_address)
            .order_by(LedgerEntryORM.asset_id)
            .all()
        )
        return [self._to_domain(e) for e in orm_entries]

    def count(self) -> int:
        return self._db.query(LedgerEntryORM).count()

    def delete_all(self) -> int:
        deleted = self._db.query(LedgerEntryORM).delete()
        self._db.flush()
        return deleted

    def _get_orm(self, wallet_address: str, asset_id: str) -> Optional[LedgerEntryORM]:
        return (
            self._db.query(LedgerEntryORM)
            .filter(
                LedgerEntryORM.wallet_address == wallet_address,
                LedgerEntryORM.asset_id == asset_id,
            )
            .first()
        )

    @staticmethod
    def _to_domain(orm: LedgerEntryORM) -> LedgerEntry:
        """Convert ORM model to domain model."""
        return LedgerEntry(
            wallet_address=orm.wallet_address,
            asset_id=orm.asset_id,
            quantity_held=Decimal(str(orm.quantity_held)),
            weighted_avg_cost=Decimal(str(orm.weighted_avg_cost)),
            last_updated=orm.last_updated,
        )
