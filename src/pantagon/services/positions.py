"""Per-symbol positions, average cost and approximate realized P&L."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..models.stock_trade import StockTrade, TradeSide

UNKNOWN_SYMBOL = "UNKNOWN"


@dataclass
class SymbolPosition:
    """Running totals for one symbol.

    ``invested_amount`` counts BUY cash spent (fees included) plus INIT cost
    basis. ``net_stock_amount`` is the share value at execution prices, net of
    sells.
    """

    symbol: str
    invested_amount: float = 0.0
    sell_proceeds: float = 0.0
    total_shares: float = 0.0
    net_stock_amount: float = 0.0
    avg_buy_price: float = 0.0
    trade_count: int = 0
    sell_count: int = 0
    latest_date: Optional[datetime] = None

    @property
    def realized_pnl(self) -> float:
        return realized_pnl(self)


@dataclass(frozen=True)
class PortfolioOverview:
    total_invested: float
    total_sold: float
    realized_pnl: float
    symbol_count: int
    init_count: int
    buy_count: int
    trade_count: int


@dataclass(frozen=True)
class SymbolDetail:
    position: SymbolPosition
    trades: list[StockTrade]


def symbol_key(symbol: str | None) -> str:
    return symbol.strip().upper() if symbol and symbol.strip() else UNKNOWN_SYMBOL


def _side(trade: StockTrade) -> TradeSide:
    return TradeSide(trade.side)


def realized_pnl(position: SymbolPosition) -> float:
    """Proceeds minus a proportional share of the invested amount.

    This is an approximation, not FIFO or LIFO lot matching. A position sold
    beyond its recorded shares charges the full invested amount.
    """

    if position.sell_count == 0:
        return 0.0
    if position.total_shares < 0:
        ratio = 1.0
    else:
        ratio = abs(position.sell_proceeds) / (position.invested_amount or 1.0)
    return position.sell_proceeds - position.invested_amount * min(ratio, 1.0)


def summarize_positions(trades: Iterable[StockTrade]) -> list[SymbolPosition]:
    """Aggregate trades per symbol, largest net stock amount first."""

    positions: dict[str, SymbolPosition] = {}
    buy_prices: dict[str, list[float]] = {}

    for trade in trades:
        key = symbol_key(trade.symbol)
        position = positions.get(key)
        if position is None:
            position = positions[key] = SymbolPosition(symbol=key)
            buy_prices[key] = []

        position.trade_count += 1
        if position.latest_date is None or trade.transaction_date > position.latest_date:
            position.latest_date = trade.transaction_date

        shares = float(trade.shares or 0.0)
        stock_amount = float(trade.stock_amount or 0.0)
        side = _side(trade)
        if side is TradeSide.SELL:
            position.sell_count += 1
            position.sell_proceeds += float(trade.total_amount or 0.0)
            position.total_shares -= shares
            position.net_stock_amount -= stock_amount
            continue

        if side is TradeSide.BUY:
            position.invested_amount += float(trade.total_amount or 0.0)
        else:
            position.invested_amount += stock_amount
        position.total_shares += shares
        position.net_stock_amount += stock_amount
        buy_prices[key].append(float(trade.executed_price))

    for key, position in positions.items():
        prices = buy_prices[key]
        position.avg_buy_price = sum(prices) / len(prices) if prices else 0.0

    return sorted(positions.values(), key=lambda p: p.net_stock_amount, reverse=True)


def portfolio_overview(trades: Iterable[StockTrade]) -> PortfolioOverview:
    records = list(trades)
    positions = summarize_positions(records)
    sides = [_side(trade) for trade in records]
    return PortfolioOverview(
        total_invested=sum(p.invested_amount for p in positions),
        total_sold=sum(p.sell_proceeds for p in positions),
        realized_pnl=sum(realized_pnl(p) for p in positions),
        symbol_count=len(positions),
        init_count=sides.count(TradeSide.INIT),
        buy_count=sides.count(TradeSide.BUY),
        trade_count=len(records),
    )


def symbol_detail(trades: Iterable[StockTrade], symbol: str) -> SymbolDetail | None:
    """Position plus its trades newest first, or ``None`` for an unseen symbol."""

    key = symbol_key(symbol)
    matching = [trade for trade in trades if symbol_key(trade.symbol) == key]
    if not matching:
        return None
    matching.sort(key=lambda t: (t.transaction_date, t.id or 0), reverse=True)
    return SymbolDetail(position=summarize_positions(matching)[0], trades=matching)
