"""Blueprint exports."""

from . import fx, ledger, overview, stocks

__all__ = [
    "fx",
    "ledger",
    "overview",
    "stocks",
]
