"""
Append-only in-memory trade log.

Every trade accepted by the exchange is appended here. Stocks query the log
by symbol and trailing time window when recalculating their price.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Iterator

from gbce.models import Trade, TradeSide

logger = logging.getLogger(__name__)


def local_now() -> datetime:
    """Current local time with its UTC offset, so ages are measured in absolute time."""
    return datetime.now().astimezone()


class TradeLog:
    """
    Append-only store of trades for the lifetime of the process.

    Trades are never mutated or removed. A linear scan is used for lookups;
    the log only ever holds one interactive session worth of trades.
    """

    def __init__(self, clock: Callable[[], datetime] = local_now):
        """
        Initialize an empty trade log.

        Args:
            clock: Source of the current time, used to stamp trades and
                to measure trade age
        """
        self.clock = clock
        self._trades: list[Trade] = []

    def record(
        self,
        symbol: str,
        side: TradeSide,
        quantity: int,
        price: float,
    ) -> Trade:
        """
        Append a trade stamped with the current time.

        Args:
            symbol: Ticker symbol
            side: BUY or SELL
            quantity: Number of shares
            price: Price per share

        Returns:
            The recorded Trade

        Raises:
            InvalidTradeError: If the symbol is empty or quantity/price is negative
        """
        trade = Trade.create(
            symbol=symbol,
            side=side,
            quantity=quantity,
            price=price,
            timestamp=self.clock(),
        )
        self._trades.append(trade)

        logger.debug(
            f"Recorded {side.value} {quantity} {symbol} @ {price:.2f} "
            f"({len(self._trades)} trades)"
        )
        return trade

    def trades_for(self, symbol: str, window: timedelta) -> list[Trade]:
        """
        Get trades for a symbol no older than the window.

        Args:
            symbol: Ticker symbol to match
            window: Maximum trade age (inclusive)

        Returns:
            Matching trades in the order they were recorded
        """
        now = self.clock()
        return [
            t for t in self._trades
            if t.symbol == symbol and now - t.timestamp <= window
        ]

    def __len__(self) -> int:
        return len(self._trades)

    def __iter__(self) -> Iterator[Trade]:
        return iter(self._trades)
