"""
Interactive command dispatcher for the GBCE stock simulator.

Each input line is split on whitespace into a command word and its
arguments. Every error path prints an ERROR line and returns to waiting for
input; only ``quit`` (or running out of input) ends the loop.
"""

import logging
import math
from datetime import timedelta
from typing import Callable, Iterable, Optional

import click

from gbce.logging import DecisionLogger
from gbce.market import StockIndex
from gbce.models import DEFAULT_PRICE_WINDOW, MAX_TRADE_QUANTITY, TradeSide
from gbce import report

logger = logging.getLogger(__name__)


class CommandShell:
    """
    Dispatches text commands to the stock index.

    The shell holds no state of its own beyond references to the index,
    the price window and the output sink.
    """

    def __init__(
        self,
        index: StockIndex,
        price_window: timedelta = DEFAULT_PRICE_WINDOW,
        output: Callable[[str], None] = click.echo,
        audit_log: Optional[DecisionLogger] = None,
    ):
        """
        Initialize the shell.

        Args:
            index: Stock index to operate on
            price_window: Trailing window used by the price command
            output: Sink for command output, one message per call
            audit_log: Optional audit logger for trades and calculations
        """
        self.index = index
        self.price_window = price_window
        self.output = output
        self.audit_log = audit_log

        self.commands: dict[str, Callable[[list[str]], None]] = {
            "help": self.do_help,
            "index": self.do_index,
            "trade": self.do_trade,
            "buy": self.do_buy,
            "sell": self.do_sell,
            "list": self.do_list,
            "price": self.do_price,
            "yield": self.do_yield,
            "pe": self.do_pe,
        }

    def execute(self, line: str) -> bool:
        """
        Execute one command line.

        Args:
            line: Raw input line

        Returns:
            False if the command was quit, True to keep reading input
        """
        tokens = line.split()
        if not tokens:
            return True

        command, args = tokens[0], tokens[1:]
        if command == "quit":
            return False

        handler = self.commands.get(command)
        if handler is None:
            self.output(f"ERROR: Unknown command {command}")
            return True

        logger.debug(f"Executing {command} {args}")
        handler(args)
        return True

    def run(self, lines: Iterable[str]) -> None:
        """Execute lines until quit or the input is exhausted."""
        for line in lines:
            if not self.execute(line):
                break

    def do_help(self, args: list[str]) -> None:
        self.output(report.format_help(self.price_window))

    def do_index(self, args: list[str]) -> None:
        index_value = self.index.geometric_mean_index()
        if self.audit_log is not None:
            self.audit_log.log_index_calculated(index_value)
        self.output(report.format_index(index_value, self.index))

    def do_trade(self, args: list[str]) -> None:
        trades = self.index.random_trades()
        if self.audit_log is not None:
            self.audit_log.log_random_trades_generated(trades)
        self.output(f"Done. {report.format_trade_count(len(self.index.trade_log))}")

    def do_buy(self, args: list[str]) -> None:
        self._manual_trade("buy", TradeSide.BUY, args)

    def do_sell(self, args: list[str]) -> None:
        self._manual_trade("sell", TradeSide.SELL, args)

    def _manual_trade(self, command: str, side: TradeSide, args: list[str]) -> None:
        """Handle 'buy|sell <quantity> <symbol> <price>'."""
        if len(args) < 3:
            self.output(f"ERROR: syntax is '{command} <quantity> <symbol> <price>'")
            return

        raw_quantity, symbol, raw_price = args[0], args[1], args[2]

        if not self.index.exists(symbol):
            self.output(f"ERROR: Unknown symbol {symbol}")
            return

        try:
            quantity = int(raw_quantity)
            price = float(raw_price)
        except ValueError:
            self.output(f"ERROR: Invalid quantity or price '{raw_quantity}' '{raw_price}'")
            return

        if not math.isfinite(price) or quantity > MAX_TRADE_QUANTITY:
            self.output(f"ERROR: Invalid quantity or price '{raw_quantity}' '{raw_price}'")
            return

        trade = self.index.trade(symbol, side, quantity, price)
        if trade is None:
            self.output(f"ERROR: Cannot {command} {raw_quantity} shares of {symbol} at {raw_price}")
            return

        if self.audit_log is not None:
            self.audit_log.log_trade_recorded(trade)
        self.output(f"Done. {report.format_trade_count(len(self.index.trade_log))}")

    def do_list(self, args: list[str]) -> None:
        self.output(report.format_trade_list(self.index.trade_log))

    def do_price(self, args: list[str]) -> None:
        prices = self.index.recalculate_prices(self.price_window)
        if self.audit_log is not None:
            self.audit_log.log_prices_recalculated(prices, self.price_window)
        self.output(report.format_prices(self.index))

    def do_yield(self, args: list[str]) -> None:
        self.output(report.format_yields(self.index))

    def do_pe(self, args: list[str]) -> None:
        self.output(report.format_pe_ratios(self.index))
