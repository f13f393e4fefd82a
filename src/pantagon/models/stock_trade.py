"""SQLModel definition for brokerage stock trades."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

FEE_FIELDS: tuple[str, ...] = ("commission", "vat", "fee", "sec_fee", "taf_fee")


class TradeSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    INIT = "INIT"  # position that existed before tracking started


class StockTrade(SQLModel, table=True):
    """An executed trade with its fee breakdown and derived amounts."""

    __tablename__: ClassVar[str] = "dime_transactions"

    id: Optional[int] = Field(default=None, primary_key=True)
    side: TradeSide = Field(nullable=False, index=True)
    symbol: str = Field(default="", index=True, max_length=32)
    transaction_date: dt.datetime = Field(sa_type=DateTime, nullable=False, index=True)
    executed_price: float = Field(nullable=False)
    shares: Optional[float] = Field(default=None)
    total_amount: float = Field(default=0.0, nullable=False)
    stock_amount: Optional[float] = Field(default=None)

    commission: Optional[float] = Field(default=None)
    vat: Optional[float] = Field(default=None)
    fee: Optional[float] = Field(default=None)
    sec_fee: Optional[float] = Field(default=None)
    taf_fee: Optional[float] = Field(default=None)

    # Original entry mode: cash for BUY, share count for SELL and INIT.
    input_amount_usd: Optional[float] = Field(default=None)
    input_shares: Optional[float] = Field(default=None)
    currency: str = Field(default="USD", max_length=3)
