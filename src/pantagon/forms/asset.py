"""Validation for manual account cash-flow entries."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..models.asset_transaction import Direction
from .base import EntryForm


class AssetEntryForm(EntryForm):
    """Represents an asset transaction prior to validation."""

    FIELDS = ("account_name", "type", "amount", "date", "tag", "note")

    def __init__(self) -> None:
        super().__init__()
        self.account_name: str = ""
        self.direction: Optional[Direction] = None
        self.amount: Optional[float] = None
        self.date: Optional[date] = None
        self.tag: Optional[str] = None
        self.note: Optional[str] = None

    def validate(self) -> bool:
        self.errors.clear()

        self.account_name = self._raw("account_name")
        if not self.account_name:
            self._add_error("account_name", "Account is required.")
        elif len(self.account_name) > 128:
            self._add_error("account_name", "Account must be 128 characters or fewer.")

        direction_raw = self._raw("type").upper()
        self.direction = None
        if direction_raw not in {d.value for d in Direction}:
            self._add_error("type", "Type must be IN or OUT.")
        else:
            self.direction = Direction(direction_raw)

        self.amount = None
        if not self._raw("amount"):
            self._add_error("amount", "Amount is required.")
        else:
            parsed = self._parse_float("amount", "the amount")
            if parsed is not None:
                if parsed <= 0:
                    self._add_error("amount", "Amount must be greater than zero.")
                else:
                    self.amount = parsed

        self.date = None
        if not self._raw("date"):
            self._add_error("date", "Date is required.")
        else:
            self.date = self._parse_date("date")

        self.tag = self._raw("tag") or None
        if self.tag and len(self.tag) > 64:
            self._add_error("tag", "Tag must be 64 characters or fewer.")

        self.note = self._raw("note") or None
        if self.note and len(self.note) > 500:
            self._add_error("note", "Note must be 500 characters or fewer.")

        return not self.errors
