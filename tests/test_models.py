"""
Tests for trade and stock models.
"""

from datetime import datetime, timedelta

import pytest

from gbce.market import TradeLog
from gbce.models import (
    DEFAULT_LISTINGS,
    ConfigurationError,
    MAX_TRADE_QUANTITY,
    InvalidTradeError,
    SimulatorConfig,
    Stock,
    StockListing,
    StockType,
    Trade,
    TradeSide,
)


WINDOW = timedelta(minutes=15)


class TestTradeCreate:
    """Tests for Trade.create validation."""

    def test_valid_trade(self):
        """Test a valid trade keeps all its fields."""
        stamp = datetime(2026, 10, 18, 9, 30)
        trade = Trade.create("ALE", TradeSide.BUY, 10, 5.0, stamp)

        assert trade.symbol == "ALE"
        assert trade.side == TradeSide.BUY
        assert trade.quantity == 10
        assert trade.price == 5.0
        assert trade.timestamp == stamp
        assert trade.value == 50.0

    def test_empty_symbol_rejected(self):
        with pytest.raises(InvalidTradeError):
            Trade.create("", TradeSide.BUY, 1, 1.0, datetime.now())

    def test_negative_quantity_rejected(self):
        with pytest.raises(InvalidTradeError):
            Trade.create("ALE", TradeSide.BUY, -1, 1.0, datetime.now())

    def test_negative_price_rejected(self):
        with pytest.raises(InvalidTradeError):
            Trade.create("ALE", TradeSide.BUY, 1, -1.0, datetime.now())

    def test_quantity_above_limit_rejected(self):
        with pytest.raises(InvalidTradeError):
            Trade.create("ALE", TradeSide.BUY, MAX_TRADE_QUANTITY + 1, 1.0, datetime.now())

    @pytest.mark.parametrize("price", [float("inf"), float("nan")])
    def test_non_finite_price_rejected(self, price):
        with pytest.raises(InvalidTradeError):
            Trade.create("ALE", TradeSide.BUY, 1, price, datetime.now())

    def test_zero_quantity_and_price_allowed(self):
        """Test that zero is a valid quantity and price."""
        trade = Trade.create("ALE", TradeSide.SELL, 0, 0.0, datetime.now())
        assert trade.quantity == 0
        assert trade.price == 0.0

    def test_trade_is_immutable(self):
        trade = Trade.create("ALE", TradeSide.BUY, 1, 1.0, datetime.now())
        with pytest.raises(AttributeError):
            trade.price = 2.0


class TestStockListing:
    """Tests for StockListing validation."""

    def test_default_seed_data(self):
        """Test the built-in listings match the exchange sample data."""
        rows = [
            (l.symbol, l.stock_type, l.last_dividend, l.fixed_dividend, l.par_value)
            for l in DEFAULT_LISTINGS
        ]
        assert rows == [
            ("TEA", StockType.COMMON, 0.00, 0, 1.00),
            ("POP", StockType.COMMON, 0.08, 0, 1.00),
            ("ALE", StockType.COMMON, 0.23, 0, 0.60),
            ("GIN", StockType.PREFERRED, 0.08, 2, 1.00),
            ("JOE", StockType.COMMON, 0.13, 0, 2.50),
        ]

    def test_zero_par_value_rejected(self):
        with pytest.raises(ConfigurationError):
            StockListing("XYZ", StockType.COMMON, 0.1, 0, 0.0)

    def test_empty_symbol_rejected(self):
        with pytest.raises(ConfigurationError):
            StockListing("", StockType.COMMON, 0.1, 0, 1.0)

    def test_negative_dividend_rejected(self):
        with pytest.raises(ConfigurationError):
            StockListing("XYZ", StockType.COMMON, -0.1, 0, 1.0)

    @pytest.mark.parametrize(
        "last_dividend,fixed_dividend,par_value",
        [
            (0.1, 0, float("nan")),
            (0.1, 0, float("inf")),
            (float("nan"), 0, 1.0),
            (0.1, float("inf"), 1.0),
        ],
    )
    def test_non_finite_values_rejected(self, last_dividend, fixed_dividend, par_value):
        with pytest.raises(ConfigurationError):
            StockListing("XYZ", StockType.COMMON, last_dividend, fixed_dividend, par_value)

    def test_default_config(self):
        config = SimulatorConfig()
        assert [l.symbol for l in config.listings] == ["TEA", "POP", "ALE", "GIN", "JOE"]
        assert config.price_window == timedelta(seconds=900)


class TestStockValuation:
    """Tests for dividend yield and P/E ratio."""

    def test_price_starts_at_par(self):
        stock = Stock(StockListing("ALE", StockType.COMMON, 0.23, 0, 0.60))
        assert stock.price == 0.60

    def test_common_dividend_yield(self):
        """Test common stock yield is last dividend over price."""
        stock = Stock(StockListing("POP", StockType.COMMON, 0.08, 0, 1.00))
        stock.price = 2.0
        assert stock.dividend_yield() == 0.08 / 2.0

    def test_preferred_dividend_yield(self):
        """Test preferred stock yield is fixed dividend over price."""
        stock = Stock(StockListing("GIN", StockType.PREFERRED, 0.08, 2, 1.00))
        stock.price = 4.0
        assert stock.dividend_yield() == 2 / 4.0

    def test_dividend_yield_zero_price(self):
        stock = Stock(StockListing("POP", StockType.COMMON, 0.08, 0, 1.00))
        stock.price = 0.0
        assert stock.dividend_yield() == 0.0

    def test_pe_ratio(self):
        stock = Stock(StockListing("JOE", StockType.COMMON, 0.13, 0, 2.50))
        assert stock.pe_ratio() == 2.50 / 0.13

    def test_pe_ratio_no_dividend(self):
        """Test P/E ratio is 0 when the last dividend is 0."""
        stock = Stock(StockListing("TEA", StockType.COMMON, 0.00, 0, 1.00))
        assert stock.pe_ratio() == 0.0


class TestRecalculatePrice:
    """Tests for Stock.recalculate_price."""

    def test_volume_weighted_price(self, trade_log: TradeLog):
        """Test price becomes the volume-weighted average of recent trades."""
        stock = Stock(StockListing("ALE", StockType.COMMON, 0.23, 0, 0.60))
        trade_log.record("ALE", TradeSide.BUY, 10, 2.0)
        trade_log.record("ALE", TradeSide.SELL, 20, 3.0)

        price = stock.recalculate_price(trade_log, WINDOW)

        assert price == pytest.approx((10 * 2.0 + 20 * 3.0) / (10 + 20))
        assert stock.price == price

    def test_no_trades_leaves_price(self, trade_log: TradeLog):
        stock = Stock(StockListing("ALE", StockType.COMMON, 0.23, 0, 0.60))
        trade_log.record("POP", TradeSide.BUY, 10, 2.0)

        assert stock.recalculate_price(trade_log, WINDOW) == 0.60

    def test_old_trades_ignored(self, trade_log: TradeLog, clock):
        """Test trades outside the window do not affect the price."""
        stock = Stock(StockListing("ALE", StockType.COMMON, 0.23, 0, 0.60))
        trade_log.record("ALE", TradeSide.BUY, 100, 9.0)
        clock.advance(minutes=20)
        trade_log.record("ALE", TradeSide.BUY, 10, 1.5)

        assert stock.recalculate_price(trade_log, WINDOW) == pytest.approx(1.5)

    def test_zero_volume_leaves_price(self, trade_log: TradeLog):
        stock = Stock(StockListing("ALE", StockType.COMMON, 0.23, 0, 0.60))
        trade_log.record("ALE", TradeSide.BUY, 0, 5.0)

        assert stock.recalculate_price(trade_log, WINDOW) == 0.60
