"""Net worth dashboard and per-account detail."""

from __future__ import annotations

from flask import jsonify

from ...errors import RecordNotFoundError
from ...extensions import get_state
from ...services.ledger import account_summary, account_transactions, net_worth_view
from ...services.snapshots import load_asset_snapshot
from ..common import to_jsonable
from . import bp


@bp.get("/")
def dashboard():
    """Total net worth and account balances in institution order."""

    state = get_state()
    snapshot = load_asset_snapshot(state.assets)
    view = net_worth_view(snapshot, state.config.ACCOUNT_PRIORITY)
    return jsonify(to_jsonable(view))


@bp.get("/accounts/<path:name>")
def account_detail(name: str):
    state = get_state()
    records = account_transactions(load_asset_snapshot(state.assets), name)
    if not records:
        raise RecordNotFoundError(f"Account {name!r} has no transactions.")

    return jsonify(
        {
            "account": name,
            "summary": to_jsonable(account_summary(records)),
            "transactions": to_jsonable(records),
        }
    )
