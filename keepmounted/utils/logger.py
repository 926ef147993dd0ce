"""Logging setup - plain text or JSON lines"""

import logging
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

ROOT_LOGGER = 'keepmounted'
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
JSON_LOG_FIELDS = '%(asctime)s %(name)s %(levelname)s %(message)s'

LOG_FORMATS = ('text', 'json')


def get_logger(name: str) -> logging.Logger:
    """Get a module logger"""
    return logging.getLogger(name)


def setup_logging(level: str = 'INFO', fmt: str = 'text',
                  stream: Optional[object] = None) -> logging.Logger:
    """
    Configure the package logger.

    Replaces any handler installed by an earlier call, so it is safe to
    call again once the final configuration is known.

    Args:
        level: Log level name (DEBUG, INFO, ...)
        fmt: 'text' or 'json'
        stream: Output stream (default: stderr)

    Returns:
        The configured package logger
    """
    if fmt not in LOG_FORMATS:
        raise ValueError(f"Unknown log format: {fmt}. Must be one of {', '.join(LOG_FORMATS)}")

    handler = logging.StreamHandler(stream or sys.stderr)
    if fmt == 'json':
        handler.setFormatter(JsonFormatter(JSON_LOG_FIELDS))
    else:
        handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))

    logger = logging.getLogger(ROOT_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
