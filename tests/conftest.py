"""
Pytest fixtures for the GBCE stock simulator tests.

Provides a controllable clock, the default trade log and index, and a
command shell that captures its output.
"""

import random
from datetime import datetime, timedelta

import pytest

from gbce.market import StockIndex, TradeLog
from gbce.models import StockListing, StockType
from gbce.shell import CommandShell


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at 2026-10-18 09:30:00."""
    return FakeClock(datetime(2026, 10, 18, 9, 30, 0))


@pytest.fixture
def trade_log(clock: FakeClock) -> TradeLog:
    return TradeLog(clock=clock)


@pytest.fixture
def stock_index(trade_log: TradeLog) -> StockIndex:
    """Default five-stock index with a seeded random source."""
    return StockIndex(trade_log=trade_log, rng=random.Random(42))


@pytest.fixture
def power_of_two_listings() -> list[StockListing]:
    """Listings priced 1, 2, 4, 8, 16 at par."""
    return [
        StockListing(f"S{i}", StockType.COMMON, 0.1, 0, float(2 ** i))
        for i in range(5)
    ]


@pytest.fixture
def output() -> list[str]:
    """Collected shell output messages."""
    return []


@pytest.fixture
def shell(stock_index: StockIndex, output: list[str]) -> CommandShell:
    return CommandShell(index=stock_index, output=output.append)
