"""Repository protocol definitions for domain layer."""

from .asset_transaction import AssetTransactionRepository
from .fx_conversion import FxConversionRepository
from .stock_trade import StockTradeRepository

__all__ = [
    "AssetTransactionRepository",
    "FxConversionRepository",
    "StockTradeRepository",
]
