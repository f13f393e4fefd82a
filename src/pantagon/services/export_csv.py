"""CSV export helpers for Pantagon."""

from __future__ import annotations

import csv
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Iterable

from ..models.asset_transaction import AssetTransaction

ASSET_HEADERS = ["id", "date", "account_name", "type", "amount", "tag", "note"]


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def export_asset_transactions_csv(
    *, transactions: Iterable[AssetTransaction], output_path: Path
) -> Path:
    """Write asset transactions to CSV at `output_path`.

    The columns match what ``import_asset_csv`` reads with its default mapping.
    Returns the path written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(
            fh, fieldnames=ASSET_HEADERS, extrasaction="ignore", quoting=csv.QUOTE_MINIMAL
        )
        writer.writeheader()
        for tx in transactions:
            writer.writerow(
                {name: _serialize_value(getattr(tx, name, None)) for name in ASSET_HEADERS}
            )

    return output_path
