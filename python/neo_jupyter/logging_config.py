"""Logging configuration for neo-jupyter."""

import logging
import os
import sys
from typing import Union

LOG_FORMAT = "[%(levelname)s] %(name)s - %(filename)s:%(lineno)d: %(message)s"


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below ``level``."""

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def parse_level(level: str) -> Union[int, str]:
    """Convert a level string into something ``Logger.setLevel`` accepts.

    Numeric strings become ints, everything else is upper-cased. An unknown
    name still raises from ``setLevel``.
    """
    level = level.strip()
    return int(level) if level.isdigit() else level.upper()


def get_logger(name: str = "neo_jupyter") -> logging.Logger:
    """Get a configured logger for the package.

    The logger uses NEO_JUPYTER_LOG_LEVEL (or LOG_LEVEL) to determine the log
    level and defaults to INFO; an unknown level also falls back to INFO.
    Records below WARNING are written to stdout, the rest to stderr, so the
    supervisor's errors land on the error stream next to the child's own
    output.

    Returns:
        Configured logger instance for the package.
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        level = os.getenv("NEO_JUPYTER_LOG_LEVEL") or os.getenv("LOG_LEVEL", "INFO")
        formatter = logging.Formatter(LOG_FORMAT)

        out_handler = logging.StreamHandler(sys.stdout)
        out_handler.setFormatter(formatter)
        out_handler.addFilter(_BelowLevelFilter(logging.WARNING))
        logger.addHandler(out_handler)

        err_handler = logging.StreamHandler(sys.stderr)
        err_handler.setFormatter(formatter)
        err_handler.setLevel(logging.WARNING)
        logger.addHandler(err_handler)

        try:
            logger.setLevel(parse_level(level))
        except ValueError:
            # Reported as a ConfigurationError by parse_environment_variables
            logger.setLevel(logging.INFO)

        # Prevent propagation to avoid duplicate logs
        logger.propagate = False

    return logger


# Package logger instance
logger = get_logger()
