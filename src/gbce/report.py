"""
Text report formatting for the GBCE stock simulator.

Every function returns a string ready to print; nothing here writes to the
console directly.
"""

from datetime import timedelta
from typing import Iterable

from gbce.models import Stock, StockType, Trade, TradeSide


BANNER = "\nSuper Simple Stocks\n\nUse 'help' for instructions\n"

PROMPT = "->"

TABLE_RULE = "=== ==== ======== ==== ======== ========"
TABLE_HEADER = "Sym Type Last Div Fix  PAR Val. T. Price"


def format_help(window: timedelta) -> str:
    """Usage text; the price line reflects the configured window."""
    minutes = window.total_seconds() / 60
    return "\n".join([
        "",
        "COMMANDS:",
        "",
        "    help   - Show this help.",
        "    index  - Show the list of stock and the All-share index.",
        "    trade  - Add random trading.",
        "    buy    - Buy stock. eg. buy 22 ALE 3.12",
        "    sell   - Sell stock. eg. sell 22 ALE 3.12",
        "    list   - Show trading database.",
        f"    price  - Recalculate price of stock based on last {minutes:g} mins trade",
        "    yield  - Show the dividend yield of all stock",
        "    pe     - Show the P/E Ratio of all stock",
        "    quit   - end the program",
        "",
    ])


def format_trade_count(count: int) -> str:
    return f"{count} trading operations in the database"


def format_stock_row(stock: Stock) -> str:
    """Format one stock as a table row aligned with TABLE_HEADER."""
    stock_type = "PREF" if stock.stock_type == StockType.PREFERRED else "COMM"
    return (
        f"{stock.symbol:>3} "
        f"{stock_type:>4} "
        f"{stock.last_dividend:>8.2f} "
        f"{stock.fixed_dividend:>4.2f} "
        f"{stock.par_value:>8.2f} "
        f"{stock.price:>8.2f}"
    )


def format_stock_table(stocks: Iterable[Stock]) -> str:
    lines = [TABLE_RULE, TABLE_HEADER, TABLE_RULE]
    lines.extend(format_stock_row(stock) for stock in stocks)
    return "\n".join(lines)


def format_index(index_value: float, stocks: Iterable[Stock]) -> str:
    """
    Format the all-share index followed by the stock table.

    Args:
        index_value: GBCE index value
        stocks: Stocks to list under the index

    Returns:
        Formatted report string
    """
    return "\n".join([
        "",
        f"GBCE Index {index_value:.4f}",
        "",
        format_stock_table(stocks),
        "",
    ])


def format_trade(trade: Trade) -> str:
    """Format a trade as '[YYYY-MM-DD HH:MM:SS] BOUGHT 5 shares of ALE at 3.00'."""
    action = "BOUGHT" if trade.side == TradeSide.BUY else "SOLD"
    return (
        f"[{trade.timestamp:%Y-%m-%d %H:%M:%S}] {action} "
        f"{trade.quantity} shares of {trade.symbol} at {trade.price:.2f}"
    )


def format_trade_list(trades: Iterable[Trade]) -> str:
    """Format every trade followed by the total trade count."""
    lines = [format_trade(trade) for trade in trades]
    lines.extend(["", format_trade_count(len(lines))])
    return "\n".join(lines)


def format_prices(stocks: Iterable[Stock]) -> str:
    return "\n".join(f"Price of {s.symbol} is {s.price:.2f}" for s in stocks)


def format_yields(stocks: Iterable[Stock]) -> str:
    return "\n".join(
        f"Dividend Yield of {s.symbol} is {s.dividend_yield():.2f}" for s in stocks
    )


def format_pe_ratios(stocks: Iterable[Stock]) -> str:
    return "\n".join(
        f"Price/Earnings Ratio of {s.symbol} is {s.pe_ratio():.2f}" for s in stocks
    )
