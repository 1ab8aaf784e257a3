"""
Logging module for the GBCE stock simulator.

Provides diagnostic logging setup and the optional append-only audit log.
"""

from gbce.logging.console import configure_logging
from gbce.logging.decision_log import DecisionLogger

__all__ = [
    "configure_logging",
    "DecisionLogger",
]
