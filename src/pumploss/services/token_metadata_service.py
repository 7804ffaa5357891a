"""Asset display metadata."""

import logging
from typing import Callable, Optional

from pumploss.core.exceptions import ValidationError
from pumploss.core.timezone import now_epoch_seconds
from pumploss.domain.models import TokenMetadata
from pumploss.domain.views import TradedAsset
from pumploss.repositories.protocols import UnitOfWork

logger = logging.getLogger(__name__)


class TokenMetadataService:
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        clock: Callable[[], float] = now_epoch_seconds,
    ):
        self._uow_factory = uow_factory
        self._clock = clock

    def upsert_metadata(
        self,
        mint: str,
        symbol: Optional[str] = None,
        name: Optional[str] = None,
        decimals: Optional[int] = None,
        logo_uri: Optional[str] = None,
    ) -> TokenMetadata:
        """Create or update metadata; fields passed as None keep their stored value."""
        if not mint or not mint.strip():
            raise ValidationError("mint is required")
        if decimals is not None and decimals < 0:
            raise ValidationError("decimals must be non-negative")

        mint = mint.strip()
        with self._uow_factory() as uow:
            current = uow.tokens.get(mint) or TokenMetadata(mint=mint)
            merged = TokenMetadata(
                mint=mint,
                symbol=symbol if symbol is not None else current.symbol,
                name=name if name is not None else current.name,
                decimals=decimals if decimals is not None else current.decimals,
                logo_uri=logo_uri if logo_uri is not None else current.logo_uri,
                last_updated=self._clock(),
            )
            saved = uow.tokens.upsert(merged)
            uow.commit()

        logger.info("Token metadata saved for %s", mint[:8])
        return saved

    def get_metadata(self, mint: str) -> Optional[TokenMetadata]:
        with self._uow_factory() as uow:
            return uow.tokens.get(mint)

    def list_traded_assets(self) -> list[TradedAsset]:
        """Distinct mints in the Trade Log, most traded first."""
        with self._uow_factory() as uow:
            counts = uow.trades.count_by_asset()
            known = uow.tokens.list_mints()

        assets = [
            TradedAsset(mint=mint, trade_count=count, has_metadata=mint in known)
            for mint, count in counts.items()
        ]
        assets.sort(key=lambda a: (-a.trade_count, a.mint))
        return assets
