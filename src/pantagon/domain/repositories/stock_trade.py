"""Stock trade repository protocol."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol

from ...models.stock_trade import StockTrade


class StockTradeRepository(Protocol):
    """Repository for brokerage trade records."""

    def get_by_id(self, trade_id: int) -> Optional[StockTrade]:
        """Retrieve a trade by ID."""
        ...

    def list_all(self) -> list[StockTrade]:
        """List every trade, most recent first."""
        ...

    def create(self, trade: StockTrade) -> StockTrade:
        """Insert a single trade."""
        ...

    def create_many(self, trades: Iterable[StockTrade]) -> list[StockTrade]:
        """Insert all trades atomically; on failure none are stored."""
        ...

    def delete(self, trade_id: int) -> bool:
        """Delete a trade by ID, returning False when it does not exist."""
        ...
