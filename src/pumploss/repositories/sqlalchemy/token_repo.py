"""SQLAlchemy implementation of TokenMetadataRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from pumploss.domain.models import TokenMetadata
from pumploss.repositories.sqlalchemy.orm_models import TokenMetadataORM


class SqlAlchemyTokenMetadataRepository:
    """SQLAlchemy-backed token metadata."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, mint: str) -> Optional[TokenMetadata]:
        orm_token = self._db.query(TokenMetadataORM).filter(
            TokenMetadataORM.mint == mint
        ).first()
        return self._to_domain(orm_token) if orm_token else None

    def upsert(self, metadata: TokenMetadata) -> TokenMetadata:
        orm_token = self._db.query(TokenMetadataORM).filter(
            TokenMetadataORM.mint == metadata.mint
        ).first()

        if orm_token:
            orm_token.symbol = metadata.symbol
            orm_token.name = metadata.name
            orm_token.decimals = metadata.decimals
            orm_token.logo_uri = metadata.logo_uri
            orm_token.last_updated = metadata.last_updated
        else:
            orm_token = TokenMetadataORM(
                mint=metadata.mint,
                symbol=metadata.symbol,
                name=metadata.name,
                decimals=metadata.decimals,
                logo_uri=metadata.logo_uri,
                last_updated=metadata.last_updated,
            )
            self._db.add(orm_token)

        self._db.flush()
        return self._to_domain(orm_token)

    def list_mints(self) -> set[str]:
        return {row[0] for row in self._db.query(TokenMetadataORM.mint).all()}

    def count(self) -> int:
        return self._db.query(TokenMetadataORM).count()

    def delete_all(self) -> int:
        deleted = self._db.query(TokenMetadataORM).delete()
        self._db.flush()
        return deleted

    @staticmethod
    def _to_domain(orm: TokenMetadataORM) -> TokenMetadata:
        """Convert ORM model to domain model."""
        return TokenMetadata(
            mint=orm.mint,
            symbol=orm.symbol,
            name=orm.name,
            decimals=orm.decimals,
            logo_uri=orm.logo_uri,
            last_updated=orm.last_updated,
        )
