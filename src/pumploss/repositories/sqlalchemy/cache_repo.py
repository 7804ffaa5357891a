"""SQLAlchemy implementation of LeaderboardCacheRepository."""

import json
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pumploss.core.exceptions import WriteConflictError
from pumploss.domain.models import LeaderboardCacheRecord, LeaderboardPeriod
from pumploss.domain.views import LeaderboardEntry
from pumploss.repositories.sqlalchemy.orm_models import LeaderboardCacheORM


class SqlAlchemyLeaderboardCacheRepository:
    """SQLAlchemy-backed leaderboard cache, one row per period."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, period: LeaderboardPeriod) -> Optional[LeaderboardCacheRecord]:
        orm_record = (
            self._db.query(LeaderboardCacheORM)
            .filter(LeaderboardCacheORM.period == LeaderboardPeriod(period))
            .first()
        )
        return self._to_domain(orm_record) if orm_record else None

    def upsert(self, record: LeaderboardCacheRecord) -> LeaderboardCacheRecord:
        """Insert or overwrite the record for record.period."""
        data_json = json.dumps([entry.to_dict() for entry in record.entries])
        orm_record = (
            self._db.query(LeaderboardCacheORM)
            .filter(LeaderboardCacheORM.period == record.period)
            .first()
        )

        if orm_record:
            orm_record.data_json = data_json
            orm_record.last_updated = record.last_updated
        else:
            orm_record = LeaderboardCacheORM(
                period=record.period,
                data_json=data_json,
                last_updated=record.last_updated,
            )
            self._db.add(orm_record)

        try:
            self._db.flush()
        except IntegrityError as exc:
            raise WriteConflictError(f"Cache record {record.period.value} created concurrently") from exc
        return self._to_domain(orm_record)

    def count(self) -> int:
        return self._db.query(LeaderboardCacheORM).count()

    def delete_all(self) -> int:
        deleted = self._db.query(LeaderboardCacheORM).delete()
        self._db.flush()
        return deleted

    @staticmethod
    def _to_domain(orm: LeaderboardCacheORM) -> LeaderboardCacheRecord:
        """Convert ORM model to domain model."""
        return LeaderboardCacheRecord(
            period=orm.period,
            entries=[LeaderboardEntry.from_dict(d) for d in json.loads(orm.data_json)],
            last_updated=orm.last_updated,
        )
