"""
Core data models for the GBCE stock simulator.

This module defines the fundamental data structures used throughout the system,
including trade records, stock listings, live stock entries and the simulator
configuration. Prices and dividends are plain floats.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from gbce.market.trade_log import TradeLog


class StockType(Enum):
    """Stock class, selects the dividend yield formula."""
    COMMON = "COMMON"
    PREFERRED = "PREFERRED"


class TradeSide(Enum):
    """Trade direction indicator."""
    BUY = "BUY"
    SELL = "SELL"


class ActionType(Enum):
    """Types of actions written to the audit log."""
    CONFIG_LOADED = "CONFIG_LOADED"
    TRADE_RECORDED = "TRADE_RECORDED"
    RANDOM_TRADES_GENERATED = "RANDOM_TRADES_GENERATED"
    PRICES_RECALCULATED = "PRICES_RECALCULATED"
    INDEX_CALCULATED = "INDEX_CALCULATED"


# Largest quantity a single trade may carry
MAX_TRADE_QUANTITY = 2 ** 31 - 1


class InvalidTradeError(ValueError):
    """Raised when trade parameters are rejected."""
    pass


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""
    pass


@dataclass(frozen=True)
class Trade:
    """
    A single executed trade.

    Trades are immutable once recorded. Use ``Trade.create`` to build one so
    the parameters are validated.

    Attributes:
        timestamp: When the trade was recorded
        symbol: Ticker symbol of the stock
        side: BUY or SELL
        quantity: Number of shares (non-negative)
        price: Price per share (non-negative)
    """
    timestamp: datetime
    symbol: str
    side: TradeSide
    quantity: int
    price: float

    @classmethod
    def create(
        cls,
        symbol: str,
        side: TradeSide,
        quantity: int,
        price: float,
        timestamp: datetime,
    ) -> "Trade":
        """
        Factory method that validates trade parameters.

        Raises:
            InvalidTradeError: If the symbol is empty or quantity/price is negative
        """
        if not symbol:
            raise InvalidTradeError("symbol cannot be empty")
        if quantity < 0:
            raise InvalidTradeError(f"quantity must be >= 0, got {quantity}")
        if quantity > MAX_TRADE_QUANTITY:
            raise InvalidTradeError(f"quantity must be <= {MAX_TRADE_QUANTITY}")
        if price < 0:
            raise InvalidTradeError(f"price must be >= 0, got {price}")
        if not math.isfinite(price):
            raise InvalidTradeError(f"price must be finite, got {price}")

        return cls(
            timestamp=timestamp,
            symbol=symbol,
            side=side,
            quantity=quantity,
            price=price,
        )

    @property
    def value(self) -> float:
        """Total traded value (quantity * price)."""
        return self.quantity * self.price


@dataclass(frozen=True)
class StockListing:
    """
    Static definition of a stock traded on the exchange.

    Attributes:
        symbol: Ticker symbol
        stock_type: COMMON or PREFERRED
        last_dividend: Last dividend paid per share
        fixed_dividend: Fixed dividend rate, only used for PREFERRED stock
        par_value: Par value, also the starting price
    """
    symbol: str
    stock_type: StockType
    last_dividend: float
    fixed_dividend: float
    par_value: float

    def __post_init__(self):
        if not self.symbol:
            raise ConfigurationError("stock symbol cannot be empty")
        values = (self.last_dividend, self.fixed_dividend, self.par_value)
        if not all(math.isfinite(v) for v in values):
            raise ConfigurationError(
                f"dividends and par_value for {self.symbol} must be finite"
            )
        if self.last_dividend < 0 or self.fixed_dividend < 0:
            raise ConfigurationError(
                f"dividends for {self.symbol} must be >= 0"
            )
        if self.par_value <= 0:
            raise ConfigurationError(
                f"par_value for {self.symbol} must be positive, got {self.par_value}"
            )


@dataclass
class Stock:
    """
    A stock entry in the index.

    Wraps an immutable listing with the current traded price, which starts
    at par value and only changes through ``recalculate_price``.
    """
    listing: StockListing
    price: float = field(init=False)

    def __post_init__(self):
        self.price = self.listing.par_value

    @property
    def symbol(self) -> str:
        return self.listing.symbol

    @property
    def stock_type(self) -> StockType:
        return self.listing.stock_type

    @property
    def last_dividend(self) -> float:
        return self.listing.last_dividend

    @property
    def fixed_dividend(self) -> float:
        return self.listing.fixed_dividend

    @property
    def par_value(self) -> float:
        return self.listing.par_value

    def dividend_yield(self) -> float:
        """
        Dividend yield at the current price.

        Common stock uses the last dividend, preferred stock the fixed
        dividend rate. Returns 0 while the stock has a zero price.
        """
        if not self.price:
            return 0.0
        if self.stock_type == StockType.COMMON:
            return self.last_dividend / self.price
        if self.stock_type == StockType.PREFERRED:
            return self.fixed_dividend / self.price
        return 0.0

    def pe_ratio(self) -> float:
        """Price/earnings ratio, 0 when there is no dividend."""
        if self.last_dividend:
            return self.price / self.last_dividend
        return 0.0

    def recalculate_price(self, trade_log: "TradeLog", window: timedelta) -> float:
        """
        Set the price to the volume-weighted price of recent trades.

        The price is left unchanged when nothing traded inside the window.

        Args:
            trade_log: Log to read trades from
            window: How far back trades are taken into account

        Returns:
            The resulting price
        """
        trades = trade_log.trades_for(self.symbol, window)

        total_value = sum(t.value for t in trades)
        total_quantity = sum(t.quantity for t in trades)

        # Zero-volume trades carry no price information
        if total_quantity:
            self.price = total_value / total_quantity

        return self.price


# Values in pounds rather than pennies
DEFAULT_LISTINGS: tuple[StockListing, ...] = (
    StockListing("TEA", StockType.COMMON, 0.00, 0, 1.00),
    StockListing("POP", StockType.COMMON, 0.08, 0, 1.00),
    StockListing("ALE", StockType.COMMON, 0.23, 0, 0.60),
    StockListing("GIN", StockType.PREFERRED, 0.08, 2, 1.00),
    StockListing("JOE", StockType.COMMON, 0.13, 0, 2.50),
)

DEFAULT_PRICE_WINDOW = timedelta(minutes=15)


@dataclass
class SimulatorConfig:
    """
    Simulator configuration, optionally loaded from YAML.

    Attributes:
        listings: Stocks in the index, in display order
        price_window: Trailing window used by the price command
        random_max_quantity: Upper bound for random trade quantities
        random_min_price: Lowest random trade price
        random_price_steps: Number of one-penny price steps above the minimum
        random_seed: Seed for random trades (None for nondeterministic)
    """
    listings: list[StockListing] = field(default_factory=lambda: list(DEFAULT_LISTINGS))
    price_window: timedelta = DEFAULT_PRICE_WINDOW
    random_max_quantity: int = 109
    random_min_price: float = 0.41
    random_price_steps: int = 299
    random_seed: Optional[int] = None


@dataclass
class DecisionLogEntry:
    """
    Entry for the append-only audit log.

    Attributes:
        timestamp: When the action occurred
        action_type: Type of action
        details: JSON-serializable details dictionary
    """
    timestamp: datetime
    action_type: ActionType
    details: dict

    @classmethod
    def create(
        cls,
        action_type: ActionType,
        details: dict,
    ) -> "DecisionLogEntry":
        """Factory method with auto-generated timestamp."""
        return cls(
            timestamp=datetime.now(),
            action_type=action_type,
            details=details,
        )
