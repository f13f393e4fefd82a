"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

DEFAULT_ACCOUNT_PRIORITY = ("dime", "scb", "kbank", "ttb", "pvd", "sso")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Split a comma separated environment variable into lower-cased items."""

    value = os.getenv(name)
    if not value:
        return default
    items = tuple(part.strip().lower() for part in value.split(",") if part.strip())
    return items or default


class BaseConfig:
    """Base configuration shared across environments."""

    DB_FILENAME = "pantagon.db"

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("PANTAGON_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("PANTAGON_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("PANTAGON_DATABASE_URL", self._build_sqlite_url())
        self.HOME_CURRENCY = os.getenv("PANTAGON_HOME_CURRENCY", "THB").strip().upper()
        self.TRADE_CURRENCY = os.getenv("PANTAGON_TRADE_CURRENCY", "USD").strip().upper()
        self.ACCOUNT_PRIORITY = _env_list("PANTAGON_ACCOUNT_PRIORITY", DEFAULT_ACCOUNT_PRIORITY)
        self.LOG_LEVEL = os.getenv("PANTAGON_LOG_LEVEL", "INFO").strip().upper()
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("PANTAGON_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding the SQLite file and logs."""

        data_root = os.getenv("PANTAGON_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration for the test suite; never touches the on-disk database."""

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = os.getenv("PANTAGON_TEST_DATABASE_URL", "sqlite://")

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        options = super().sqlalchemy_engine_options()
        if self.DATABASE_URL == "sqlite://":
            # a single shared connection keeps the in-memory schema alive
            from sqlalchemy.pool import StaticPool

            options["poolclass"] = StaticPool
        return options
