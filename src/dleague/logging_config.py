"""
Centralized logging configuration.

Library modules only create loggers (logging.getLogger(__name__)); the CLI
calls setup_logging() once at startup.

Environment variables:
- LOG_LEVEL: DEBUG|INFO|WARNING|ERROR|CRITICAL
"""

import logging
import os
import sys
from typing import Optional

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _resolve_level(level: Optional[str]) -> int:
    level_str = (level or os.getenv("LOG_LEVEL", "WARNING")).upper()
    return LEVELS.get(level_str, logging.WARNING)


def setup_logging(level: Optional[str] = None) -> int:
    """Configure the root logger.

    Args:
        level: Optional level name (e.g., "DEBUG"). If omitted, uses the
            LOG_LEVEL env var or WARNING.

    Returns:
        The numeric level applied
    """
    numeric_level = _resolve_level(level)

    # Avoid duplicate handlers if re-configuring
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    if numeric_level <= logging.DEBUG:
        fmt = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
    else:
        fmt = "%(levelname).1s %(message)s"

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%H:%M:%S"))

    root.setLevel(numeric_level)
    root.addHandler(handler)
    return numeric_level
