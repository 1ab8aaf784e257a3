"""
Append-only audit logging for the GBCE stock simulator.

Trades, price recalculations and index calculations can be written to a
JSONL file for later inspection. The simulator never reads this file back
to restore state.
"""

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from gbce.models import (
    ActionType,
    DecisionLogEntry,
    SimulatorConfig,
    Trade,
)


class DecisionLogger:
    """
    Append-only audit logger.

    Writes all actions to a JSONL file. Each line is a complete JSON object
    representing one action.
    """

    def __init__(self, log_path: str | Path):
        """
        Initialize the audit logger.

        Args:
            log_path: Path to the log file (will be created if not exists)
        """
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, entry: DecisionLogEntry) -> None:
        """
        Write an audit log entry.

        Args:
            entry: DecisionLogEntry to write
        """
        record = {
            "timestamp": entry.timestamp.isoformat(),
            "action_type": entry.action_type.value,
            "details": entry.details,
        }

        with open(self.log_path, "a") as f:
            f.write(json.dumps(record, cls=AuditEncoder) + "\n")

    def log_config_loaded(
        self,
        config: SimulatorConfig,
        config_path: str | None,
    ) -> None:
        """
        Log the configuration the simulator started with.

        Args:
            config: Loaded configuration
            config_path: Path to configuration file, None for defaults
        """
        details = {
            "config_path": config_path,
            "symbols": [listing.symbol for listing in config.listings],
            "price_window_seconds": config.price_window.total_seconds(),
            "random_seed": config.random_seed,
        }
        self.log(DecisionLogEntry.create(ActionType.CONFIG_LOADED, details))

    def log_trade_recorded(self, trade: Trade) -> None:
        """Log a single manually entered trade."""
        self.log(DecisionLogEntry.create(
            ActionType.TRADE_RECORDED,
            _trade_details(trade),
        ))

    def log_random_trades_generated(self, trades: list[Trade]) -> None:
        """Log a batch of random trades."""
        details = {
            "count": len(trades),
            "trades": [_trade_details(t) for t in trades],
        }
        self.log(DecisionLogEntry.create(ActionType.RANDOM_TRADES_GENERATED, details))

    def log_prices_recalculated(
        self,
        prices: dict[str, float],
        window: timedelta,
    ) -> None:
        """
        Log a price recalculation.

        Args:
            prices: Resulting price by symbol
            window: Trailing window used
        """
        details = {
            "window_seconds": window.total_seconds(),
            "prices": prices,
        }
        self.log(DecisionLogEntry.create(ActionType.PRICES_RECALCULATED, details))

    def log_index_calculated(self, index_value: float) -> None:
        """Log a GBCE index calculation."""
        self.log(DecisionLogEntry.create(
            ActionType.INDEX_CALCULATED,
            {"index": index_value},
        ))

    def read_log(self) -> list[DecisionLogEntry]:
        """
        Read all entries from the log file.

        Returns:
            List of DecisionLogEntry objects
        """
        if not self.log_path.exists():
            return []

        entries = []
        with open(self.log_path, "r") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                record = json.loads(line)
                entries.append(
                    DecisionLogEntry(
                        timestamp=datetime.fromisoformat(record["timestamp"]),
                        action_type=ActionType(record["action_type"]),
                        details=record.get("details", {}),
                    )
                )

        return entries

    def filter_by_action_type(
        self,
        action_type: ActionType,
    ) -> list[DecisionLogEntry]:
        """
        Get log entries of a specific action type.

        Args:
            action_type: Action type to filter by

        Returns:
            Filtered list of entries
        """
        return [e for e in self.read_log() if e.action_type == action_type]


def _trade_details(trade: Trade) -> dict:
    return {
        "timestamp": trade.timestamp,
        "symbol": trade.symbol,
        "side": trade.side.value,
        "quantity": trade.quantity,
        "price": trade.price,
    }


class AuditEncoder(json.JSONEncoder):
    """JSON encoder that handles datetime types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)
