"""Pytest configuration and shared fixtures for Pantagon tests.

This module provides database fixtures, record factories, a Flask app/client
and helper utilities for testing aggregation, repositories and routes without
touching the real app database.
"""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

import pytest

from pantagon import create_app
from pantagon.infra.database import create_session_factory, init_database
from pantagon.infra.repositories import (
    SQLModelAssetTransactionRepository,
    SQLModelFxConversionRepository,
    SQLModelStockTradeRepository,
)
from pantagon.models import AssetTransaction, Direction, FxConversion, StockTrade, TradeSide
from sqlmodel import create_engine


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Keep config, logs and databases inside the test's tmp directory."""

    for name in (
        "PANTAGON_DATABASE_URL",
        "PANTAGON_ACCOUNT_PRIORITY",
        "PANTAGON_HOME_CURRENCY",
        "PANTAGON_TRADE_CURRENCY",
        "PANTAGON_LOG_LEVEL",
        "PANTAGON_SECRET_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PANTAGON_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("PANTAGON_DEV_MODE", "true")


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with every table created
    """
    db_path = Path(tmp_path) / "pantagon-test.db"
    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    init_database(engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Transactional session scopes, as the repositories expect."""

    return create_session_factory(db_engine)


@pytest.fixture
def asset_repo(session_factory):
    return SQLModelAssetTransactionRepository(session_factory)


@pytest.fixture
def fx_repo(session_factory):
    return SQLModelFxConversionRepository(session_factory)


@pytest.fixture
def trade_repo(session_factory):
    return SQLModelStockTradeRepository(session_factory)


# =============================================================================
# Record Factories
# =============================================================================


@pytest.fixture
def make_asset():
    """Build unsaved asset transactions with sensible defaults."""

    def _make(
        account_name: str = "SCB Savings",
        type: str | Direction = Direction.IN,
        amount: float = 100.0,
        on: date | None = None,
        **extra,
    ) -> AssetTransaction:
        return AssetTransaction(
            account_name=account_name,
            type=Direction(type),
            amount=amount,
            date=on or date(2024, 1, 15),
            **extra,
        )

    return _make


@pytest.fixture
def asset_factory(asset_repo, make_asset):
    """Factory for persisted asset transactions."""

    def _create(**kwargs) -> AssetTransaction:
        return asset_repo.create(make_asset(**kwargs))

    return _create


@pytest.fixture
def make_fx():
    """Build unsaved FX conversions; the rate defaults to ``thb / foreign``."""

    def _make(
        thb_amount: float = 3500.0,
        foreign_amount: float = 100.0,
        from_currency: str = "THB",
        to_currency: str = "USD",
        at: datetime | None = None,
        exchange_rate: float | None = None,
    ) -> FxConversion:
        return FxConversion(
            transaction_at=at or datetime(2024, 3, 10, 9, 30),
            from_currency=from_currency,
            to_currency=to_currency,
            thb_amount=thb_amount,
            foreign_amount=foreign_amount,
            exchange_rate=exchange_rate if exchange_rate is not None else thb_amount / foreign_amount,
        )

    return _make


@pytest.fixture
def fx_factory(fx_repo, make_fx):
    def _create(**kwargs) -> FxConversion:
        return fx_repo.create(make_fx(**kwargs))

    return _create


@pytest.fixture
def make_trade():
    """Build unsaved trades with already-derived amounts."""

    def _make(
        side: str | TradeSide = TradeSide.BUY,
        symbol: str = "AAPL",
        shares: float = 10.0,
        executed_price: float = 100.0,
        total_amount: float | None = None,
        stock_amount: float | None = None,
        at: datetime | None = None,
        **extra,
    ) -> StockTrade:
        stock = stock_amount if stock_amount is not None else shares * executed_price
        return StockTrade(
            side=TradeSide(side),
            symbol=symbol,
            transaction_date=at or datetime(2024, 2, 1, 14, 30),
            executed_price=executed_price,
            shares=shares,
            stock_amount=stock,
            total_amount=total_amount if total_amount is not None else stock,
            **extra,
        )

    return _make


@pytest.fixture
def trade_factory(trade_repo, make_trade):
    def _create(**kwargs) -> StockTrade:
        return trade_repo.create(make_trade(**kwargs))

    return _create


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch):
    """Application wired to a throwaway SQLite file."""

    monkeypatch.setenv("PANTAGON_TEST_DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
    application = create_app("testing")
    yield application
    application.extensions["pantagon"].engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def state(app):
    return app.extensions["pantagon"]


# =============================================================================
# Helpers
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Amounts are stored as floats, so sums can differ by rounding noise.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
