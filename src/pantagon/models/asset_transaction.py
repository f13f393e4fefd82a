"""SQLModel definition for account cash-flow records."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


class Direction(str, Enum):
    """Sign convention of a cash-flow record relative to its account."""

    IN = "IN"
    OUT = "OUT"


class AssetTransaction(SQLModel, table=True):
    """Money moving into or out of a named account.

    ``amount`` is always an unsigned magnitude; ``type`` carries the sign.
    """

    __tablename__: ClassVar[str] = "pantagon_assets"

    id: Optional[int] = Field(default=None, primary_key=True)
    account_name: str = Field(default="", index=True, max_length=128)
    type: Direction = Field(nullable=False)
    amount: float = Field(default=0.0, ge=0, nullable=False)
    date: dt.date = Field(nullable=False, index=True)
    note: Optional[str] = Field(default=None, max_length=500)
    tag: Optional[str] = Field(default=None, max_length=64)
    created_at: dt.datetime = Field(default_factory=_utcnow, sa_type=DateTime, nullable=False)
