"""Validation for single stock trade entries."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..models.stock_trade import FEE_FIELDS, TradeSide
from .base import EntryForm


class TradeEntryForm(EntryForm):
    """Represents a hand-entered trade prior to derivation.

    BUY trades are entered as a cash amount, SELL and INIT trades as a share
    count.
    """

    FIELDS = (
        "side",
        "symbol",
        "transaction_date",
        "executed_price",
        "input_amount_usd",
        "input_shares",
        *FEE_FIELDS,
    )

    def __init__(self) -> None:
        super().__init__()
        self.side: Optional[TradeSide] = None
        self.symbol: str = ""
        self.transaction_date: Optional[datetime] = None
        self.executed_price: Optional[float] = None
        self.input_amount_usd: Optional[float] = None
        self.input_shares: Optional[float] = None
        self.fees: dict[str, Optional[float]] = {}

    def validate(self) -> bool:
        self.errors.clear()

        side_raw = self._raw("side").upper() or TradeSide.BUY.value
        self.side = None
        if side_raw not in {s.value for s in TradeSide}:
            self._add_error("side", "Side must be BUY, SELL or INIT.")
        else:
            self.side = TradeSide(side_raw)

        self.symbol = self._raw("symbol").upper()
        if not self.symbol or not self._raw("executed_price") or not self._raw("transaction_date"):
            self._add_error("form", "Symbol, date, and executed price are required.")
            return False

        self.transaction_date = self._parse_datetime("transaction_date")
        self.executed_price = self._parse_float("executed_price", "the executed price")
        if self.executed_price is not None and self.executed_price <= 0:
            self._add_error("executed_price", "Executed price must be greater than zero.")

        self.input_amount_usd = None
        self.input_shares = None
        if self.side is TradeSide.BUY:
            if not self._raw("input_amount_usd"):
                self._add_error("input_amount_usd", "Input Amount (USD) is required for BUY.")
            else:
                self.input_amount_usd = self._parse_float("input_amount_usd", "the input amount")
        elif self.side is not None:
            if not self._raw("input_shares"):
                self._add_error("input_shares", f"Shares are required for {self.side.value}.")
            else:
                self.input_shares = self._parse_float("input_shares", "the share count")

        self.fees = {}
        for name in FEE_FIELDS:
            value = self._parse_float(name, name.replace("_", " "))
            if value is not None and value < 0:
                self._add_error(name, "Fees cannot be negative.")
            self.fees[name] = value

        return not self.errors
