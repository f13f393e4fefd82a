"""Immutable record snapshots handed to the aggregation functions.

Each view fetches its record set once and works on the frozen tuple; when to
fetch again is decided by the caller (a request, a CLI command).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Iterator, TypeVar

from ..domain.repositories import (
    AssetTransactionRepository,
    FxConversionRepository,
    StockTradeRepository,
)
from ..models import AssetTransaction, FxConversion, StockTrade

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


@dataclass(frozen=True)
class Snapshot(Generic[RecordT]):
    """A point-in-time copy of one record set."""

    records: tuple[RecordT, ...]
    fetched_at: datetime = field(default_factory=datetime.now)

    def __iter__(self) -> Iterator[RecordT]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)


def load_asset_snapshot(
    repo: AssetTransactionRepository, *, account_name: str | None = None
) -> Snapshot[AssetTransaction]:
    rows = repo.list_all() if account_name is None else repo.list_by_account(account_name)
    logger.debug("Loaded asset snapshot", extra={"count": len(rows), "account": account_name})
    return Snapshot(tuple(rows))


def load_fx_snapshot(repo: FxConversionRepository) -> Snapshot[FxConversion]:
    rows = repo.list_all()
    logger.debug("Loaded fx snapshot", extra={"count": len(rows)})
    return Snapshot(tuple(rows))


def load_trade_snapshot(repo: StockTradeRepository) -> Snapshot[StockTrade]:
    rows = repo.list_all()
    logger.debug("Loaded trade snapshot", extra={"count": len(rows)})
    return Snapshot(tuple(rows))
