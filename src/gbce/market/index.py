"""
The GBCE stock index.

Holds the fixed set of stocks traded on the exchange and computes
index-level values from them: the all-share geometric mean and bulk price
recalculation from the trade log.
"""

import logging
import math
import random
from datetime import timedelta
from typing import Iterable, Iterator, Optional

from gbce.models import (
    DEFAULT_LISTINGS,
    InvalidTradeError,
    Stock,
    StockListing,
    Trade,
    TradeSide,
)
from gbce.market.trade_log import TradeLog

logger = logging.getLogger(__name__)


def geometric_mean(prices: Iterable[float]) -> float:
    """
    Geometric mean of prices, skipping zeros in the product.

    Zero prices still count towards the root, which gives the same result
    as treating them as 1. An empty input yields 0.

    Args:
        prices: Prices to aggregate

    Returns:
        The N-th root of the product of the non-zero prices
    """
    prices = list(prices)
    if not prices:
        return 0.0

    product = math.prod(p for p in prices if p)
    return math.pow(product, 1.0 / len(prices))


class StockIndex:
    """
    Fixed, ordered collection of stocks plus the trade log they price from.

    Stocks are created once from their listings and never added or removed.
    """

    def __init__(
        self,
        trade_log: TradeLog,
        listings: Iterable[StockListing] = DEFAULT_LISTINGS,
        rng: Optional[random.Random] = None,
        random_max_quantity: int = 109,
        random_min_price: float = 0.41,
        random_price_steps: int = 299,
    ):
        """
        Initialize the index.

        Args:
            trade_log: Trade log shared with the rest of the application
            listings: Stock definitions, in display order
            rng: Random source for random trades
            random_max_quantity: Upper bound for random trade quantities
            random_min_price: Lowest random trade price
            random_price_steps: Number of one-penny steps above the minimum price
        """
        self.trade_log = trade_log
        self.stocks = [Stock(listing) for listing in listings]
        self.rng = rng or random.Random()
        self.random_max_quantity = random_max_quantity
        self.random_min_price = random_min_price
        self.random_price_steps = random_price_steps

    def __iter__(self) -> Iterator[Stock]:
        return iter(self.stocks)

    def __len__(self) -> int:
        return len(self.stocks)

    @property
    def symbols(self) -> list[str]:
        return [s.symbol for s in self.stocks]

    def get(self, symbol: str) -> Optional[Stock]:
        """Look up a stock by symbol, None if it is not in the index."""
        for stock in self.stocks:
            if stock.symbol == symbol:
                return stock
        return None

    def exists(self, symbol: str) -> bool:
        """Check if a symbol exists in the index."""
        return self.get(symbol) is not None

    def trade(
        self,
        symbol: str,
        side: TradeSide,
        quantity: int,
        price: float,
    ) -> Optional[Trade]:
        """
        Record a trade in the trade log.

        Args:
            symbol: Ticker symbol
            side: BUY or SELL
            quantity: Number of shares
            price: Price per share

        Returns:
            The recorded Trade, or None if it was rejected
        """
        try:
            return self.trade_log.record(symbol, side, quantity, price)
        except InvalidTradeError as e:
            logger.warning(f"Rejected {side.value} of {symbol!r}: {e}")
            return None

    def random_trade(self, symbol: str) -> Trade:
        """
        Record a random trade for a symbol.

        Side is a coin flip, quantity is between 1 and the configured maximum,
        price is the minimum price plus a whole number of pennies.
        """
        side = TradeSide.BUY if self.rng.getrandbits(1) else TradeSide.SELL
        quantity = self.rng.randint(1, self.random_max_quantity)
        price = self.random_min_price + self.rng.randrange(self.random_price_steps) / 100.0

        return self.trade_log.record(symbol, side, quantity, price)

    def random_trades(self) -> list[Trade]:
        """Record one random trade for every stock in the index."""
        return [self.random_trade(stock.symbol) for stock in self.stocks]

    def geometric_mean_index(self) -> float:
        """Calculate the GBCE all-share index."""
        return geometric_mean(stock.price for stock in self.stocks)

    def recalculate_prices(self, window: timedelta) -> dict[str, float]:
        """
        Recalculate every stock price from trades inside the window.

        Args:
            window: Trailing window of trades to use

        Returns:
            Resulting price by symbol, in index order
        """
        prices = {
            stock.symbol: stock.recalculate_price(self.trade_log, window)
            for stock in self.stocks
        }
        logger.info(f"Recalculated prices over {window}: {prices}")
        return prices
