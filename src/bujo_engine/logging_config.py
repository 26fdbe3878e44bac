"""Logging configuration for bujo-engine.

The package keeps its loguru output disabled when imported as a library; the
CLI (or any host application) opts in through configure_logging.
"""

import sys
from typing import TextIO

from loguru import logger


def configure_logging(*, verbose: bool = False, sink: TextIO | None = None) -> None:
    """Route bujo_engine log records to a sink (stderr by default)."""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sink or sys.stderr, level=level, format="{level.icon} {message}")
    logger.enable("bujo_engine")
