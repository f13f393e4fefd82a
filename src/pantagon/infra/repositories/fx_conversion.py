"""SQLModel implementation of the FX conversion repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.fx_conversion import FxConversion
from ..database import SessionFactory, store_errors


class SQLModelFxConversionRepository:
    """SQLModel-based FX conversion repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, conversion_id: int) -> Optional[FxConversion]:
        with store_errors("fetch fx conversion"), self.session_factory() as session:
            obj = session.get(FxConversion, conversion_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[FxConversion]:
        with store_errors("fetch fx conversions"), self.session_factory() as session:
            statement = select(FxConversion).order_by(
                FxConversion.transaction_at.desc()  # type: ignore[attr-defined]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, conversion: FxConversion) -> FxConversion:
        with store_errors("insert fx conversion"), self.session_factory() as session:
            session.add(conversion)
            session.flush()
            session.refresh(conversion)
            session.expunge(conversion)
        return conversion
