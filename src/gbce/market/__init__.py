"""
Market module for the GBCE stock simulator.

Provides the append-only trade log and the stock index that prices
stocks from it.
"""

from gbce.market.trade_log import TradeLog
from gbce.market.index import StockIndex, geometric_mean

__all__ = [
    "TradeLog",
    "StockIndex",
    "geometric_mean",
]
