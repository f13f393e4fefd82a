"""Shared form plumbing: raw binding, error collection and parsers."""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any, ClassVar


class EntryForm:
    """Binds a mapping of raw values and accumulates per-field errors."""

    FIELDS: ClassVar[tuple[str, ...]] = ()

    def __init__(self) -> None:
        self.raw_data: dict[str, str] = {}
        self.errors: dict[str, list[str]] = {}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]):
        """Create a form populated from request or file data."""

        form = cls()
        form.load(data)
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        self.raw_data = {}
        for key in self.FIELDS:
            value = data.get(key)
            if value is None:
                value_str = ""
            elif isinstance(value, str):
                value_str = value
            else:
                value_str = str(value)
            self.raw_data[key] = value_str.strip()

    def validate(self) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    def _add_error(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)

    def _raw(self, field: str) -> str:
        return self.raw_data.get(field, "")

    def _parse_float(self, field: str, label: str) -> float | None:
        raw = self._raw(field)
        if not raw:
            return None
        try:
            value = float(raw.replace(",", ""))
        except ValueError:
            value = math.nan
        if not math.isfinite(value):
            self._add_error(field, f"Enter a valid number for {label}.")
            return None
        return value

    def _parse_date(self, field: str) -> date | None:
        raw = self._raw(field)
        try:
            return date.fromisoformat(raw[:10])
        except ValueError:
            self._add_error(field, "Enter a valid date (YYYY-MM-DD).")
            return None

    def _parse_datetime(self, field: str) -> datetime | None:
        raw = self._raw(field)
        try:
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            self._add_error(field, "Enter a valid date and time (YYYY-MM-DDTHH:MM).")
            return None
        return to_naive_utc(parsed)


def to_naive_utc(value: datetime) -> datetime:
    """Stored timestamps are naive UTC."""

    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
