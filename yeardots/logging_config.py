"""Logger setup for command-line runs."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Route the ``yeardots`` loggers to stderr at ``level``.

    Calling it again replaces the handler instead of adding a second one.
    """
    logger = logging.getLogger("yeardots")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    return logger
