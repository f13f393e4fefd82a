"""Stock routes: positions, trade entry, deletion and batch import."""

from __future__ import annotations

from flask import jsonify, request

from ...errors import RecordNotFoundError
from ...extensions import get_state
from ...services.positions import (
    SymbolPosition,
    portfolio_overview,
    summarize_positions,
    symbol_detail,
)
from ...services.snapshots import load_trade_snapshot
from ...services.trade_import import import_trade_batch
from ...services.trades import create_trade, delete_trade
from ..common import request_payload, to_jsonable
from . import bp


def _position_payload(position: SymbolPosition) -> dict:
    payload = to_jsonable(position)
    payload["realized_pnl"] = position.realized_pnl
    return payload


@bp.get("/")
def list_positions():
    """Portfolio totals and per-symbol positions, largest first."""

    snapshot = load_trade_snapshot(get_state().trades)
    return jsonify(
        {
            "overview": to_jsonable(portfolio_overview(snapshot)),
            "positions": [_position_payload(p) for p in summarize_positions(snapshot)],
        }
    )


@bp.get("/<symbol>")
def show_symbol(symbol: str):
    detail = symbol_detail(load_trade_snapshot(get_state().trades), symbol)
    if detail is None:
        raise RecordNotFoundError(f"No trades for {symbol.upper()}.")
    return jsonify(
        {"position": _position_payload(detail.position), "trades": to_jsonable(detail.trades)}
    )


@bp.post("/")
def add_trade():
    state = get_state()
    created = create_trade(state.trades, request_payload(), currency=state.config.TRADE_CURRENCY)
    return jsonify(to_jsonable(created)), 201


@bp.delete("/<int:trade_id>")
def remove_trade(trade_id: int):
    delete_trade(get_state().trades, trade_id)
    return jsonify({"deleted": trade_id})


@bp.post("/import")
def import_batch():
    """Import pasted JSON trades; accepts ``{"text": ...}`` or the raw body."""

    state = get_state()
    data = request.get_json(silent=True)
    if isinstance(data, dict) and isinstance(data.get("text"), str):
        text = data["text"]
    else:
        text = request.get_data(as_text=True)

    created = import_trade_batch(state.trades, text, currency=state.config.TRADE_CURRENCY)
    return jsonify({"imported": len(created), "trades": to_jsonable(created)}), 201
