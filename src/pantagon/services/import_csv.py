"""CSV ingestion of account cash-flow records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import pandas as pd

from ..domain.repositories import AssetTransactionRepository
from ..errors import ValidationError
from ..forms.asset import AssetEntryForm
from ..models.asset_transaction import AssetTransaction, Direction
from .ledger import build_asset_transaction

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ColumnMapping:
    """Maps asset transaction fields to CSV headers.

    Without a ``type`` column the amount is read as signed: negative values
    become ``OUT`` records of the absolute amount.
    """

    account_name: str = "account_name"
    amount: str = "amount"
    date: str = "date"
    type: str | None = "type"
    tag: str | None = "tag"
    note: str | None = "note"


def normalize_frame(*, file_path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """Load a CSV file into a DataFrame with consistent column casing."""

    frame = pd.read_csv(file_path, encoding=encoding)
    frame.columns = [str(c).strip().lower() for c in frame.columns]
    return frame


def _cell(row: Mapping[str, Any], column: str | None) -> str:
    if not column:
        return ""
    value = row.get(column.strip().lower())
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


def _signed_to_direction(amount_raw: str) -> tuple[str, str]:
    try:
        amount = float(amount_raw.replace(",", ""))
    except ValueError:
        # leave it for the form to report
        return "", amount_raw
    direction = Direction.IN if amount >= 0 else Direction.OUT
    return direction.value, str(abs(amount))


def row_to_entry(row: Mapping[str, Any], mapping: ColumnMapping) -> dict[str, str]:
    """Translate one CSV row into the field names used by manual entry."""

    amount = _cell(row, mapping.amount)
    direction = _cell(row, mapping.type).upper()
    if not direction and amount:
        direction, amount = _signed_to_direction(amount)
    return {
        "account_name": _cell(row, mapping.account_name),
        "type": direction,
        "amount": amount,
        "date": _cell(row, mapping.date),
        "tag": _cell(row, mapping.tag),
        "note": _cell(row, mapping.note),
    }


def load_asset_rows(frame: pd.DataFrame, mapping: ColumnMapping) -> list[AssetTransaction]:
    """Validate every row and return unsaved records.

    Raises ``ValidationError`` for the first invalid row; row numbers count the
    header as row 1.
    """

    records: list[AssetTransaction] = []
    for position, (_, series) in enumerate(frame.iterrows(), start=2):
        row = {column: series[column] for column in frame.columns}
        form = AssetEntryForm.from_mapping(row_to_entry(row, mapping))
        if not form.validate():
            problem = ValidationError.from_errors(form.errors)
            raise ValidationError(f"Row {position}: {problem.message}", form.errors)
        records.append(build_asset_transaction(form))
    return records


def import_asset_csv(
    repo: AssetTransactionRepository,
    csv_path: Path,
    mapping: ColumnMapping | None = None,
) -> list[AssetTransaction]:
    """Import a CSV file as asset transactions, all rows or none."""

    mapping = mapping or ColumnMapping()
    logger.info("Starting asset import", extra={"path": str(csv_path)})
    frame = normalize_frame(file_path=csv_path)

    try:
        records = load_asset_rows(frame, mapping)
    except ValidationError as exc:
        logger.warning("Asset import rejected", extra={"path": str(csv_path), "reason": exc.message})
        raise

    created = repo.create_many(records)
    logger.info("Asset import complete", extra={"path": str(csv_path), "count": len(created)})
    return created
