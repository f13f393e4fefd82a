"""Database and repository wiring for the Pantagon Flask app."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flask import Flask, current_app

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelAssetTransactionRepository,
    SQLModelFxConversionRepository,
    SQLModelStockTradeRepository,
)

EXTENSION_KEY = "pantagon"


@dataclass
class PantagonState:
    """Per-app engine and the repositories views and commands use."""

    config: BaseConfig
    engine: Any
    session_factory: SessionFactory
    assets: SQLModelAssetTransactionRepository
    fx: SQLModelFxConversionRepository
    trades: SQLModelStockTradeRepository


def init_db(app: Flask) -> PantagonState:
    """Initialize the engine and repositories using configuration from the app."""

    config: BaseConfig = app.config["PANTAGON_CONFIG"]
    engine, session_factory = bootstrap_database(config)
    state = PantagonState(
        config=config,
        engine=engine,
        session_factory=session_factory,
        assets=SQLModelAssetTransactionRepository(session_factory),
        fx=SQLModelFxConversionRepository(session_factory),
        trades=SQLModelStockTradeRepository(session_factory),
    )
    app.extensions[EXTENSION_KEY] = state
    return state


def get_state(app: Flask | None = None) -> PantagonState:
    """Return the state attached by ``init_db``."""

    target = app or current_app
    state = target.extensions.get(EXTENSION_KEY)
    if state is None:  # pragma: no cover - misconfigured app
        raise RuntimeError("Database engine not initialized")
    return state
