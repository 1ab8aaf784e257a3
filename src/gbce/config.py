"""
Configuration loading and management for the GBCE stock simulator.

This module handles loading simulator settings from YAML files, resolving
the log level from the environment, and validation of configuration
parameters. With no configuration file the built-in seed stocks and the
15 minute price window are used.
"""

import logging
import math
import os
from datetime import timedelta
from pathlib import Path
from typing import Any, Optional

import yaml

from gbce.models import (
    MAX_TRADE_QUANTITY,
    ConfigurationError,
    SimulatorConfig,
    StockListing,
    StockType,
)


LOG_LEVEL_ENV_VAR = "GBCE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def resolve_log_level(level: Optional[str] = None) -> int:
    """
    Resolve a log level name to its numeric value.

    Falls back to the GBCE_LOG_LEVEL environment variable, then WARNING.

    Args:
        level: Explicit level name (e.g. "DEBUG"), overrides the environment

    Returns:
        Numeric logging level

    Raises:
        ConfigurationError: If the level name is unknown
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL).upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ConfigurationError(f"Unknown log level: {name}")
    return resolved


def load_config(config_path: str | Path) -> SimulatorConfig:
    """
    Load simulator configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        SimulatorConfig with validated settings

    Raises:
        ConfigurationError: If the file cannot be loaded or is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ConfigurationError("Configuration file must contain a mapping")

    return _parse_config(raw_config)


def _parse_config(raw: dict[str, Any]) -> SimulatorConfig:
    """
    Parse and validate raw configuration dictionary into SimulatorConfig.

    Keys that are absent keep their default values.
    """
    config = SimulatorConfig()

    if "stocks" in raw:
        config.listings = _parse_listings(raw["stocks"])

    if "price_window_minutes" in raw:
        minutes = _parse_float(
            raw["price_window_minutes"],
            "price_window_minutes",
            min_val=0.0,
        )
        config.price_window = parse_window(minutes, "price_window_minutes")

    if raw.get("random_seed") is not None:
        try:
            config.random_seed = int(raw["random_seed"])
        except (TypeError, ValueError, OverflowError):
            raise ConfigurationError(f"Invalid random_seed: {raw['random_seed']}")

    random_trade = raw.get("random_trade") or {}
    if not isinstance(random_trade, dict):
        raise ConfigurationError("random_trade must be a mapping")

    if "max_quantity" in random_trade:
        config.random_max_quantity = int(_parse_float(
            random_trade["max_quantity"], "random_trade.max_quantity",
            min_val=1.0, max_val=float(MAX_TRADE_QUANTITY),
        ))
    if "min_price" in random_trade:
        config.random_min_price = _parse_float(
            random_trade["min_price"], "random_trade.min_price", min_val=0.0,
        )
    if "price_steps" in random_trade:
        config.random_price_steps = int(_parse_float(
            random_trade["price_steps"], "random_trade.price_steps", min_val=1.0,
        ))

    return config


def _parse_listings(raw_stocks: Any) -> list[StockListing]:
    """
    Parse the stocks section into listings.

    Raises:
        ConfigurationError: If a stock entry is malformed or a symbol repeats
    """
    if not isinstance(raw_stocks, list) or not raw_stocks:
        raise ConfigurationError("stocks must be a non-empty list")

    listings = []
    seen: set[str] = set()

    for i, raw in enumerate(raw_stocks):
        if not isinstance(raw, dict):
            raise ConfigurationError(f"stocks[{i}] must be a mapping")

        for field in ("symbol", "type", "par_value"):
            if field not in raw:
                raise ConfigurationError(f"Missing required field stocks[{i}].{field}")

        symbol = str(raw["symbol"]).strip()
        if symbol in seen:
            raise ConfigurationError(f"Duplicate stock symbol: {symbol}")
        seen.add(symbol)

        try:
            stock_type = StockType(str(raw["type"]).upper())
        except ValueError:
            raise ConfigurationError(
                f"Invalid type for {symbol}: {raw['type']}. Expected COMMON or PREFERRED"
            )

        listings.append(
            StockListing(
                symbol=symbol,
                stock_type=stock_type,
                last_dividend=_parse_float(raw.get("last_dividend", 0), f"{symbol}.last_dividend"),
                fixed_dividend=_parse_float(raw.get("fixed_dividend", 0), f"{symbol}.fixed_dividend"),
                par_value=_parse_float(raw["par_value"], f"{symbol}.par_value"),
            )
        )

    return listings


def _parse_float(
    value: Any,
    field_name: str,
    min_val: float | None = None,
    max_val: float | None = None,
) -> float:
    """
    Parse a finite float value with optional range validation.

    Raises:
        ConfigurationError: If the value is invalid or out of range
    """
    try:
        float_value = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ConfigurationError(f"Invalid numeric value for {field_name}: {value}")

    if not math.isfinite(float_value):
        raise ConfigurationError(f"{field_name} must be finite, got {float_value}")

    if min_val is not None and float_value < min_val:
        raise ConfigurationError(
            f"{field_name} must be >= {min_val}, got {float_value}"
        )

    if max_val is not None and float_value > max_val:
        raise ConfigurationError(
            f"{field_name} must be <= {max_val}, got {float_value}"
        )

    return float_value


def parse_window(minutes: float, field_name: str) -> timedelta:
    """
    Convert a number of minutes into a price window.

    Raises:
        ConfigurationError: If the window is not finite or too large to represent
    """
    if not math.isfinite(minutes):
        raise ConfigurationError(f"{field_name} must be finite, got {minutes}")
    try:
        return timedelta(minutes=minutes)
    except (OverflowError, ValueError):
        raise ConfigurationError(f"{field_name} is out of range: {minutes}")
