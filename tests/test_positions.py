"""Tests for per-symbol position aggregation and realized P&L."""

from __future__ import annotations

from datetime import datetime

import pytest

from pantagon.services.positions import (
    UNKNOWN_SYMBOL,
    portfolio_overview,
    realized_pnl,
    summarize_positions,
    symbol_detail,
)
from tests.conftest import assert_float_equal


def test_empty_trades():
    assert summarize_positions([]) == []
    overview = portfolio_overview([])
    assert overview.total_invested == 0.0
    assert overview.realized_pnl == 0.0
    assert overview.symbol_count == 0
    assert symbol_detail([], "AAPL") is None


def test_symbols_group_case_insensitively(make_trade):
    positions = summarize_positions(
        [make_trade(symbol="aapl", shares=2.0), make_trade(symbol="AAPL", shares=3.0)]
    )

    assert len(positions) == 1
    assert positions[0].symbol == "AAPL"
    assert positions[0].total_shares == 5.0
    assert positions[0].trade_count == 2


def test_blank_symbol_groups_as_unknown(make_trade):
    positions = summarize_positions([make_trade(symbol=""), make_trade(symbol=None)])
    assert [p.symbol for p in positions] == [UNKNOWN_SYMBOL]


def test_position_totals(make_trade):
    trades = [
        make_trade(side="INIT", shares=10.0, executed_price=50.0, at=datetime(2023, 12, 1)),
        make_trade(
            side="BUY",
            shares=9.9,
            executed_price=100.0,
            stock_amount=990.0,
            total_amount=1000.0,
            at=datetime(2024, 1, 5),
        ),
        make_trade(
            side="SELL",
            shares=5.0,
            executed_price=120.0,
            stock_amount=600.0,
            total_amount=598.0,
            at=datetime(2024, 3, 9),
        ),
    ]

    [position] = summarize_positions(trades)

    assert position.invested_amount == pytest.approx(500.0 + 1000.0)
    assert position.total_shares == pytest.approx(14.9)
    assert position.sell_proceeds == pytest.approx(598.0)
    assert position.net_stock_amount == pytest.approx(500.0 + 990.0 - 600.0)
    assert position.avg_buy_price == pytest.approx(75.0)
    assert position.sell_count == 1
    assert position.latest_date == datetime(2024, 3, 9)
    assert_float_equal(position.realized_pnl, 598.0 - 1500.0 * (598.0 / 1500.0))


def test_realized_pnl_without_sells_is_zero(make_trade):
    [position] = summarize_positions([make_trade(side="BUY", total_amount=1000.0)])
    assert realized_pnl(position) == 0.0


def test_realized_pnl_when_sold_more_than_recorded(make_trade):
    trades = [
        make_trade(side="BUY", shares=1.0, executed_price=100.0, total_amount=101.0),
        make_trade(side="SELL", shares=3.0, executed_price=150.0, total_amount=449.0),
    ]
    [position] = summarize_positions(trades)

    assert position.total_shares == -2.0
    assert realized_pnl(position) == pytest.approx(449.0 - 101.0)


def test_realized_pnl_caps_ratio_at_one(make_trade):
    trades = [
        make_trade(side="BUY", shares=10.0, executed_price=10.0, total_amount=100.0),
        make_trade(side="SELL", shares=5.0, executed_price=50.0, total_amount=250.0),
    ]
    [position] = summarize_positions(trades)
    assert realized_pnl(position) == pytest.approx(150.0)


def test_positions_sorted_by_net_stock_amount(make_trade):
    positions = summarize_positions(
        [
            make_trade(symbol="SMALL", shares=1.0, executed_price=10.0),
            make_trade(symbol="BIG", shares=10.0, executed_price=100.0),
            make_trade(symbol="MID", shares=5.0, executed_price=20.0),
        ]
    )
    assert [p.symbol for p in positions] == ["BIG", "MID", "SMALL"]


def test_portfolio_overview_counts(make_trade):
    trades = [
        make_trade(side="INIT", symbol="VOO", shares=1.0, executed_price=400.0),
        make_trade(side="BUY", symbol="AAPL", total_amount=1000.0, stock_amount=990.0),
        make_trade(side="BUY", symbol="AAPL", total_amount=500.0, stock_amount=495.0),
        make_trade(side="SELL", symbol="AAPL", shares=2.0, total_amount=300.0, stock_amount=302.0),
    ]

    overview = portfolio_overview(trades)

    assert overview.total_invested == pytest.approx(400.0 + 1500.0)
    assert overview.total_sold == pytest.approx(300.0)
    assert overview.symbol_count == 2
    assert (overview.init_count, overview.buy_count, overview.trade_count) == (1, 2, 4)
    assert overview.realized_pnl == pytest.approx(300.0 - 1500.0 * (300.0 / 1500.0))


def test_symbol_detail_lists_trades_newest_first(make_trade):
    trades = [
        make_trade(symbol="AAPL", at=datetime(2024, 1, 1), id=1),
        make_trade(symbol="aapl", at=datetime(2024, 5, 1), id=2),
        make_trade(symbol="MSFT", at=datetime(2024, 6, 1), id=3),
    ]

    detail = symbol_detail(trades, "aapl")

    assert detail.position.symbol == "AAPL"
    assert [t.id for t in detail.trades] == [2, 1]
