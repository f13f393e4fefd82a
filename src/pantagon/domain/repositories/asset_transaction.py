"""Asset transaction repository protocol."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from ...models.asset_transaction import AssetTransaction


class AssetTransactionRepository(Protocol):
    """Repository for account cash-flow records."""

    def get_by_id(self, transaction_id: int) -> Optional[AssetTransaction]:
        """Retrieve a record by ID."""
        ...

    def list_all(self) -> list[AssetTransaction]:
        """List every record, newest date first."""
        ...

    def list_by_account(self, account_name: str) -> list[AssetTransaction]:
        """List records whose account name matches exactly."""
        ...

    def create(self, transaction: AssetTransaction) -> AssetTransaction:
        """Insert a single record."""
        ...

    def create_many(self, transactions: Iterable[AssetTransaction]) -> list[AssetTransaction]:
        """Insert all records in one store transaction."""
        ...
