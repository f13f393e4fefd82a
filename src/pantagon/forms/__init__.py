"""Entry forms shared by the HTTP blueprints, the CLI and importers."""

from .asset import AssetEntryForm
from .fx import FxEntryForm
from .trade import TradeEntryForm

__all__ = ["AssetEntryForm", "FxEntryForm", "TradeEntryForm"]
