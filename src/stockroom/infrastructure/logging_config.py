"""Logging setup for the command-line entry point."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "stockroom-console"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Send ``stockroom.*`` records to the current stderr at *level*.

    Calling it again replaces the console handler, so there is only ever
    one and it always writes to the stderr in effect at call time.
    """
    logger = logging.getLogger("stockroom")
    logger.setLevel(level.upper())

    for existing in [h for h in logger.handlers if h.get_name() == _HANDLER_NAME]:
        logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(handler)

    return logger
