"""
Centralized logging for skycolor.

Every module logs through a child of the "skycolor" logger
(e.g. "skycolor.weather"), so records show which component emitted them
while sharing one set of handlers.

DEBUG and INFO go to stdout, WARNING and above to stderr.
Level comes from the LOG_LEVEL environment variable.
"""

import logging
import sys
from skycolor.config import LOG_LEVEL

ROOT_LOGGER_NAME = "skycolor"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class MaxLevelFilter(logging.Filter):
    """Pass only records at or below max_level."""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self.max_level


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """
    Configure the "skycolor" logger hierarchy.

    Safe to call repeatedly: existing handlers are replaced, not stacked.

    Args:
        level: Log level name for the root skycolor logger

    Returns:
        The root skycolor logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    root.propagate = False
    root.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(MaxLevelFilter(logging.INFO))
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)

    root.addHandler(stdout_handler)
    root.addHandler(stderr_handler)
    return root


def get_logger(component: str) -> logging.Logger:
    """Child logger for one component, e.g. get_logger("weather")."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}")


logger = setup_logging()
