"""Stock trade derivation, single entry and deletion."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from ..domain.repositories import StockTradeRepository
from ..errors import RecordNotFoundError, ValidationError
from ..forms.trade import TradeEntryForm
from ..models.stock_trade import FEE_FIELDS, StockTrade, TradeSide

logger = logging.getLogger(__name__)


def total_fees(
    commission: Optional[float] = None,
    vat: Optional[float] = None,
    fee: Optional[float] = None,
    sec_fee: Optional[float] = None,
    taf_fee: Optional[float] = None,
) -> float:
    """Sum of whichever fee components are present."""

    return sum(value or 0.0 for value in (commission, vat, fee, sec_fee, taf_fee))


def derive_trade(
    side: TradeSide | str,
    symbol: str,
    transaction_date: datetime,
    executed_price: float,
    input_amount_usd: Optional[float] = None,
    input_shares: Optional[float] = None,
    currency: str = "USD",
    **fees: Optional[float],
) -> StockTrade:
    """Build a trade with shares and amounts derived from its entry mode.

    BUY is entered as cash: fees come off the top and the remainder buys
    shares. SELL is entered as shares: fees come off the proceeds. INIT records
    a pre-existing position at cost, without fees.
    """

    unknown = set(fees) - set(FEE_FIELDS)
    if unknown:
        raise TypeError(f"Unknown fee fields: {', '.join(sorted(unknown))}")

    side = TradeSide(side)
    price = float(executed_price)
    if price <= 0:
        raise ValueError("executed_price must be positive")

    if side is TradeSide.INIT:
        fees = {}
    fee_sum = total_fees(**fees)

    if side is TradeSide.BUY:
        if input_amount_usd is None:
            raise ValueError("BUY trades require input_amount_usd")
        stock_amount = float(input_amount_usd) - fee_sum
        shares = stock_amount / price
        total_amount = float(input_amount_usd)
    else:
        if input_shares is None:
            raise ValueError(f"{side.value} trades require input_shares")
        shares = float(input_shares)
        stock_amount = shares * price
        total_amount = stock_amount - fee_sum if side is TradeSide.SELL else stock_amount

    return StockTrade(
        side=side,
        symbol=symbol.strip().upper(),
        transaction_date=transaction_date,
        executed_price=price,
        shares=shares,
        stock_amount=stock_amount,
        total_amount=total_amount,
        input_amount_usd=input_amount_usd,
        input_shares=input_shares,
        currency=currency,
        **{name: fees.get(name) for name in FEE_FIELDS},
    )


def build_trade(form: TradeEntryForm, currency: str = "USD") -> StockTrade:
    return derive_trade(
        form.side,
        form.symbol,
        form.transaction_date,
        form.executed_price,
        input_amount_usd=form.input_amount_usd,
        input_shares=form.input_shares,
        currency=currency,
        **form.fees,
    )


def create_trade(
    repo: StockTradeRepository, data: Mapping[str, Any], *, currency: str = "USD"
) -> StockTrade:
    """Validate a hand-entered trade, derive its amounts and store it."""

    form = TradeEntryForm.from_mapping(data)
    if not form.validate():
        raise ValidationError.from_errors(form.errors)

    created = repo.create(build_trade(form, currency))
    logger.info(
        "Trade recorded",
        extra={"id": created.id, "symbol": created.symbol, "side": form.side.value},
    )
    return created


def delete_trade(repo: StockTradeRepository, trade_id: int) -> None:
    if not repo.delete(trade_id):
        raise RecordNotFoundError(f"Trade {trade_id} not found.")
    logger.info("Trade deleted", extra={"id": trade_id})
