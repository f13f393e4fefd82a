"""Batch trade import from pasted structured text.

Brokerage confirmations are often run through OCR or a chat assistant that
returns JSON wrapped in prose or markdown fences. The whole batch is validated
before anything is written, and then stored in a single transaction.
"""

from __future__ import annotations

import json
import logging
import math
import re
from datetime import datetime
from typing import Any, Optional

from ..domain.repositories import StockTradeRepository
from ..errors import TradeImportError
from ..forms.base import to_naive_utc
from ..models.stock_trade import FEE_FIELDS, StockTrade, TradeSide
from .trades import derive_trade

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("side", "symbol", "executed_price", "transaction_date")
# Zero-valued exchange fees are not charged and are stored as blanks.
BLANK_WHEN_ZERO = frozenset({"fee", "sec_fee", "taf_fee"})

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")
_ARRAY = re.compile(r"\[.*\]", re.DOTALL)
_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def extract_json(text: str) -> Any:
    """Decode the JSON embedded in ``text``; an array wins over an object."""

    raw = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", (text or "").strip())).strip()
    match = _ARRAY.search(raw) or _OBJECT.search(raw)
    if match is None:
        raise TradeImportError("No JSON found")
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise TradeImportError(f"Invalid JSON: {exc.msg}") from exc


def _number(value: Any, label: str, index: int) -> float:
    if isinstance(value, bool):
        raise TradeImportError(f"Item {index}: {label} must be a number")
    try:
        number = float(str(value).replace(",", "")) if isinstance(value, str) else float(value)
    except (TypeError, ValueError) as exc:
        raise TradeImportError(f"Item {index}: {label} must be a number") from exc
    if not math.isfinite(number):
        raise TradeImportError(f"Item {index}: {label} must be a finite number")
    return number


def _timestamp(value: Any, index: int) -> datetime:
    try:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError as exc:
        raise TradeImportError(f"Item {index}: invalid transaction_date {value!r}") from exc
    return to_naive_utc(parsed)


def _fees(item: dict[str, Any], index: int) -> dict[str, Optional[float]]:
    fees: dict[str, Optional[float]] = {}
    for name in FEE_FIELDS:
        value = item.get(name)
        if value is None or value == "":
            fees[name] = None
            continue
        amount = abs(_number(value, name, index))
        fees[name] = None if amount == 0 and name in BLANK_WHEN_ZERO else amount
    return fees


def _validate_item(item: Any, index: int) -> TradeSide:
    if not isinstance(item, dict) or not all(item.get(name) for name in REQUIRED_FIELDS):
        raise TradeImportError(
            f"Item {index} missing required fields ({', '.join(REQUIRED_FIELDS)})"
        )
    side_raw = str(item["side"]).strip().upper()
    if side_raw not in {s.value for s in TradeSide}:
        raise TradeImportError(f"Item {index}: side must be BUY, SELL or INIT")
    side = TradeSide(side_raw)
    if side is TradeSide.BUY and item.get("input_amount_usd") is None:
        raise TradeImportError(f"Item {index}: BUY requires input_amount_usd")
    if side is not TradeSide.BUY and item.get("input_shares") is None:
        raise TradeImportError(f"Item {index}: {side.value} requires input_shares")
    return side


def _to_trade(item: dict[str, Any], side: TradeSide, index: int, currency: str) -> StockTrade:
    price = abs(_number(item["executed_price"], "executed_price", index))
    if price == 0:
        raise TradeImportError(f"Item {index}: executed_price must be greater than zero")

    amount = shares = None
    if side is TradeSide.BUY:
        amount = _number(item["input_amount_usd"], "input_amount_usd", index)
    else:
        shares = _number(item["input_shares"], "input_shares", index)

    return derive_trade(
        side,
        str(item["symbol"]),
        _timestamp(item["transaction_date"], index),
        price,
        input_amount_usd=amount,
        input_shares=shares,
        currency=currency,
        **_fees(item, index),
    )


def parse_trade_batch(text: str, *, currency: str = "USD") -> list[StockTrade]:
    """Parse and validate every item, returning unsaved trades.

    A single JSON object is treated as a batch of one. Item numbers in error
    messages are 1-based.
    """

    payload = extract_json(text)
    items = payload if isinstance(payload, list) else [payload]
    if not items:
        raise TradeImportError("Empty array")

    sides = [_validate_item(item, index) for index, item in enumerate(items, start=1)]
    return [
        _to_trade(item, side, index, currency)
        for index, (item, side) in enumerate(zip(items, sides), start=1)
    ]


def import_trade_batch(
    repo: StockTradeRepository, text: str, *, currency: str = "USD"
) -> list[StockTrade]:
    """Store a whole batch or nothing."""

    try:
        trades = parse_trade_batch(text, currency=currency)
    except TradeImportError as exc:
        logger.warning("Trade batch rejected", extra={"reason": exc.message})
        raise

    created = repo.create_many(trades)
    logger.info(
        "Trade batch imported",
        extra={"count": len(created), "symbols": sorted({t.symbol for t in created})},
    )
    return created
