"""Concrete repository implementations using SQLModel."""

from .asset_transaction import SQLModelAssetTransactionRepository
from .fx_conversion import SQLModelFxConversionRepository
from .stock_trade import SQLModelStockTradeRepository

__all__ = [
    "SQLModelAssetTransactionRepository",
    "SQLModelFxConversionRepository",
    "SQLModelStockTradeRepository",
]
