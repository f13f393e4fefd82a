"""SQLModel implementation of the asset transaction repository."""

from __future__ import annotations

from typing import Iterable, Optional

from sqlmodel import select

from ...models.asset_transaction import AssetTransaction
from ..database import SessionFactory, store_errors


class SQLModelAssetTransactionRepository:
    """SQLModel-based asset transaction repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, transaction_id: int) -> Optional[AssetTransaction]:
        with store_errors("fetch asset transaction"), self.session_factory() as session:
            obj = session.get(AssetTransaction, transaction_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[AssetTransaction]:
        """List every record, newest date first."""
        with store_errors("fetch asset transactions"), self.session_factory() as session:
            statement = select(AssetTransaction).order_by(
                AssetTransaction.date.desc(),  # type: ignore[attr-defined]
                AssetTransaction.id.desc(),  # type: ignore[union-attr]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_by_account(self, account_name: str) -> list[AssetTransaction]:
        """List records for one account; the name must match exactly."""
        with store_errors("fetch account transactions"), self.session_factory() as session:
            statement = (
                select(AssetTransaction)
                .where(AssetTransaction.account_name == account_name)
                .order_by(
                    AssetTransaction.date.desc(),  # type: ignore[attr-defined]
                    AssetTransaction.id.desc(),  # type: ignore[union-attr]
                )
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, transaction: AssetTransaction) -> AssetTransaction:
        return self.create_many([transaction])[0]

    def create_many(self, transactions: Iterable[AssetTransaction]) -> list[AssetTransaction]:
        """Insert all records in a single session; any failure stores none."""
        items = list(transactions)
        with store_errors("insert asset transactions"), self.session_factory() as session:
            session.add_all(items)
            session.flush()
            for item in items:
                session.refresh(item)
            session.expunge_all()
        return items
