"""Ledger routes: list and record account cash flows."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import get_state
from ...services.ledger import create_asset_transaction
from ...services.snapshots import load_asset_snapshot
from ..common import request_payload, to_jsonable
from . import bp


@bp.get("/")
def list_transactions():
    """Return asset transactions newest first, optionally for one account."""

    state = get_state()
    account = request.args.get("account") or None
    snapshot = load_asset_snapshot(state.assets, account_name=account)
    return jsonify({"transactions": to_jsonable(snapshot.records), "count": len(snapshot)})


@bp.post("/")
def add_transaction():
    state = get_state()
    created = create_asset_transaction(state.assets, request_payload())
    return jsonify(to_jsonable(created)), 201
