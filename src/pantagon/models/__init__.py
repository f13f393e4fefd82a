"""SQLModel table exports."""

from .asset_transaction import AssetTransaction, Direction
from .fx_conversion import FxConversion
from .stock_trade import FEE_FIELDS, StockTrade, TradeSide

__all__ = [
    "AssetTransaction",
    "Direction",
    "FEE_FIELDS",
    "FxConversion",
    "StockTrade",
    "TradeSide",
]
