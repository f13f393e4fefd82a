"""FX routes: monthly list, analytics and new conversions."""

from __future__ import annotations

from flask import jsonify, request

from ...errors import ValidationError
from ...extensions import get_state
from ...services.fx import (
    ALL,
    FilterValue,
    FxFilters,
    analytics_view,
    monthly_view,
    record_conversion,
    shift_month,
)
from ...services.snapshots import load_fx_snapshot
from ..common import request_payload, to_jsonable
from . import bp


def _period_arg(name: str, *, upper: int | None = None) -> FilterValue:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    if raw.lower() == ALL.lower():
        return ALL
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValidationError(f"Invalid {name}: {raw!r}", {name: ["Enter a number or All."]}) from exc
    if upper is not None and not 1 <= value <= upper:
        raise ValidationError(f"Invalid {name}: {raw!r}", {name: [f"Must be between 1 and {upper}."]})
    return value


def _currency_arg(name: str) -> str | None:
    raw = (request.args.get(name) or "").strip()
    return raw.upper() if raw and raw.lower() != ALL.lower() else None


@bp.get("/")
def list_conversions():
    """Conversions for one month (the latest by default) with flow totals."""

    state = get_state()
    filters = FxFilters(
        year=_period_arg("year"),
        month=_period_arg("month", upper=12),
        from_currency=_currency_arg("from"),
        to_currency=_currency_arg("to"),
    )
    view = monthly_view(load_fx_snapshot(state.fx), filters, state.config.HOME_CURRENCY)
    previous_year, previous_month = shift_month(view.year, view.month, -1)
    next_year, next_month = shift_month(view.year, view.month, 1)

    payload = to_jsonable(view)
    payload["previous"] = {"year": previous_year, "month": previous_month}
    payload["next"] = {"year": next_year, "month": next_month}
    return jsonify(payload)


@bp.get("/analytics")
def analytics():
    state = get_state()
    currency = (request.args.get("currency") or state.config.TRADE_CURRENCY).strip()
    if currency.lower() == ALL.lower():
        currency = ALL
    view = analytics_view(
        load_fx_snapshot(state.fx),
        year=_period_arg("year"),
        currency=currency if currency == ALL else currency.upper(),
        home_currency=state.config.HOME_CURRENCY,
    )
    return jsonify(to_jsonable(view))


@bp.post("/")
def add_conversion():
    state = get_state()
    created = record_conversion(state.fx, request_payload())
    return jsonify(to_jsonable(created)), 201
