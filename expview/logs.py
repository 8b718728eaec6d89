"""Logging setup for expview."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "expview"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a rich handler writing to stderr to the package logger.

    Calling this more than once replaces the previous handler.

    Args:
        level: Logging level name (e.g., "DEBUG").

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
    return logger
