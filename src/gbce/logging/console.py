"""
Diagnostic logging setup for the GBCE stock simulator.

Diagnostics go to stderr so they never interleave with command output on
stdout.
"""

import logging
import sys


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: int = logging.WARNING) -> None:
    """
    Configure the root logger for console output.

    Only the level is updated when the root logger already has handlers.

    Args:
        level: Numeric log level
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(level)
        return

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
