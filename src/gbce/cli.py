"""
Command-line interface for the GBCE stock simulator.

Starts an interactive prompt that reads one command per line from standard
input until 'quit' or end of input. Type 'help' at the prompt for the list
of commands.
"""

import random
import sys
from typing import IO, Iterator, Optional

import click

from gbce import __version__
from gbce.config import load_config, parse_window, resolve_log_level
from gbce.logging import DecisionLogger, configure_logging
from gbce.market import StockIndex, TradeLog
from gbce.models import ConfigurationError, SimulatorConfig
from gbce.report import BANNER, PROMPT
from gbce.shell import CommandShell


def prompted_lines(stream: IO[str]) -> Iterator[str]:
    """Yield input lines, printing the prompt before each read."""
    while True:
        click.echo(PROMPT, nl=False)
        line = stream.readline()
        if not line:
            click.echo()
            return
        yield line


def build_shell(
    config: SimulatorConfig,
    audit_log: Optional[DecisionLogger] = None,
) -> CommandShell:
    """
    Wire the trade log, stock index and command shell together.

    Args:
        config: Simulator configuration
        audit_log: Optional audit logger

    Returns:
        A ready-to-run CommandShell
    """
    trade_log = TradeLog()
    index = StockIndex(
        trade_log=trade_log,
        listings=config.listings,
        rng=random.Random(config.random_seed),
        random_max_quantity=config.random_max_quantity,
        random_min_price=config.random_min_price,
        random_price_steps=config.random_price_steps,
    )
    return CommandShell(
        index=index,
        price_window=config.price_window,
        audit_log=audit_log,
    )


@click.command()
@click.version_option(version=__version__, prog_name="gbce")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to simulator configuration YAML file",
)
@click.option(
    "--seed", "-s",
    type=int,
    default=None,
    help="Seed for random trades. Overrides the config random_seed.",
)
@click.option(
    "--window-minutes", "-w",
    type=click.FloatRange(min=0),
    default=None,
    help="Trailing window for price recalculation. Defaults to 15.",
)
@click.option(
    "--log-level", "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Diagnostic log level (stderr). Defaults to $GBCE_LOG_LEVEL or WARNING.",
)
@click.option(
    "--audit-log", "-a",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append a JSONL audit trail of trades and calculations to this file",
)
def main(
    config: Optional[str],
    seed: Optional[int],
    window_minutes: Optional[float],
    log_level: Optional[str],
    audit_log: Optional[str],
):
    """
    Super Simple Stocks: an interactive GBCE exchange simulator.

    Tracks five beverage stocks, records buy and sell trades entered at the
    prompt, and derives prices, dividend yields, P/E ratios and the GBCE
    all-share index.
    """
    try:
        configure_logging(resolve_log_level(log_level))
    except ConfigurationError as e:
        click.echo(f"Error configuring logging: {e}", err=True)
        sys.exit(1)

    if config:
        try:
            sim_config = load_config(config)
        except ConfigurationError as e:
            click.echo(f"Error loading config: {e}", err=True)
            sys.exit(1)
    else:
        sim_config = SimulatorConfig()

    # Command line options override the config file
    if seed is not None:
        sim_config.random_seed = seed
    if window_minutes is not None:
        try:
            sim_config.price_window = parse_window(window_minutes, "--window-minutes")
        except ConfigurationError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    decision_logger = None
    if audit_log:
        decision_logger = DecisionLogger(audit_log)
        decision_logger.log_config_loaded(sim_config, config)

    shell = build_shell(sim_config, decision_logger)

    click.echo(BANNER)
    shell.run(prompted_lines(sys.stdin))


if __name__ == "__main__":
    main()
