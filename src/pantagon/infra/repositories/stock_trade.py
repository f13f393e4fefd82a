"""SQLModel implementation of the stock trade repository."""

from __future__ import annotations

from typing import Iterable, Optional

from sqlmodel import select

from ...models.stock_trade import StockTrade
from ..database import SessionFactory, store_errors


class SQLModelStockTradeRepository:
    """SQLModel-based stock trade repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, trade_id: int) -> Optional[StockTrade]:
        with store_errors("fetch stock trade"), self.session_factory() as session:
            obj = session.get(StockTrade, trade_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[StockTrade]:
        """List every trade, most recent first."""
        with store_errors("fetch stock trades"), self.session_factory() as session:
            statement = select(StockTrade).order_by(
                StockTrade.transaction_date.desc(),  # type: ignore[attr-defined]
                StockTrade.id.desc(),  # type: ignore[union-attr]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, trade: StockTrade) -> StockTrade:
        return self.create_many([trade])[0]

    def create_many(self, trades: Iterable[StockTrade]) -> list[StockTrade]:
        """Insert every trade inside one session so a failure leaves no partial batch."""
        items = list(trades)
        with store_errors("insert stock trades"), self.session_factory() as session:
            session.add_all(items)
            session.flush()
            for item in items:
                session.refresh(item)
            session.expunge_all()
        return items

    def delete(self, trade_id: int) -> bool:
        with store_errors("delete stock trade"), self.session_factory() as session:
            trade = session.get(StockTrade, trade_id)
            if trade is None:
                return False
            session.delete(trade)
            return True
