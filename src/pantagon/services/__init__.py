"""Service module exports."""

from . import (
    export_csv,
    fx,
    import_csv,
    ledger,
    positions,
    snapshots,
    trade_import,
    trades,
)

__all__ = [
    "export_csv",
    "fx",
    "import_csv",
    "ledger",
    "positions",
    "snapshots",
    "trade_import",
    "trades",
]
