"""Validation for currency conversion entries."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from .base import EntryForm


class FxEntryForm(EntryForm):
    """Represents an FX conversion prior to validation.

    A blank or zero ``exchange_rate`` is derived as ``thb_amount / foreign_amount``.
    """

    FIELDS = (
        "transaction_at",
        "from_currency",
        "to_currency",
        "thb_amount",
        "foreign_amount",
        "exchange_rate",
    )

    def __init__(self) -> None:
        super().__init__()
        self.transaction_at: Optional[datetime] = None
        self.from_currency: str = ""
        self.to_currency: str = ""
        self.thb_amount: Optional[float] = None
        self.foreign_amount: Optional[float] = None
        self.exchange_rate: Optional[float] = None

    def validate(self) -> bool:
        self.errors.clear()

        self.transaction_at = None
        if not self._raw("transaction_at"):
            self._add_error("transaction_at", "Date is required.")
        else:
            self.transaction_at = self._parse_datetime("transaction_at")

        self.from_currency = self._raw("from_currency").upper()
        self.to_currency = self._raw("to_currency").upper()
        if not self.from_currency:
            self._add_error("from_currency", "From currency is required.")
        if not self.to_currency:
            self._add_error("to_currency", "To currency is required.")
        if self.from_currency and self.from_currency == self.to_currency:
            self._add_error("to_currency", "From and to currency must differ.")

        self.thb_amount = self._required_positive("thb_amount", "the local amount")
        self.foreign_amount = self._required_positive("foreign_amount", "the foreign amount")

        self.exchange_rate = self._parse_float("exchange_rate", "the exchange rate")
        if self.exchange_rate is not None and self.exchange_rate < 0:
            self._add_error("exchange_rate", "Exchange rate cannot be negative.")

        return not self.errors

    def _required_positive(self, field: str, label: str) -> Optional[float]:
        if not self._raw(field):
            self._add_error(field, f"Enter {label}.")
            return None
        value = self._parse_float(field, label)
        if value is not None and value <= 0:
            self._add_error(field, f"{label.capitalize()} must be greater than zero.")
            return None
        return value
