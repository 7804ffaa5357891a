"""Token metadata domain model."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class TokenMetadata:
    """Display metadata for an asset mint."""

    mint: str
    symbol: Optional[str] = None
    name: Optional[str] = None
    decimals: int = 6
    logo_uri: Optional[str] = None
    last_updated: Optional[float] = None
