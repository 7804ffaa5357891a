"""Token metadata repository protocol."""

from typing import Protocol, Optional

from pumploss.domain.models import TokenMetadata


class TokenMetadataRepository(Protocol):
    """Interface for asset display metadata."""

    def get(self, mint: str) -> Optional[TokenMetadata]:
        ...

    def upsert(self, metadata: TokenMetadata) -> TokenMetadata:
        ...

    def list_mints(self) -> set[str]:
        ...

    def count(self) -> int:
        ...

    def delete_all(self) -> int:
        ...
