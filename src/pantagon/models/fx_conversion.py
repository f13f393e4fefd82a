"""SQLModel definition for currency conversions."""

from __future__ import annotations

import datetime as dt
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class FxConversion(SQLModel, table=True):
    """A single exchange between two currencies.

    ``thb_amount`` is expressed in the home currency and ``foreign_amount`` in
    the other leg of the exchange, whichever direction the money moved.
    """

    __tablename__: ClassVar[str] = "pantagon_usd"

    id: Optional[int] = Field(default=None, primary_key=True)
    transaction_at: dt.datetime = Field(sa_type=DateTime, nullable=False, index=True)
    from_currency: str = Field(nullable=False, max_length=8)
    to_currency: str = Field(nullable=False, max_length=8)
    foreign_amount: float = Field(default=0.0, nullable=False)
    thb_amount: float = Field(default=0.0, nullable=False)
    exchange_rate: float = Field(default=0.0, nullable=False)
