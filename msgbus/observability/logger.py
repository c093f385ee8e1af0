"""Structured logging for bus events (subscribe, unsubscribe, emit, delivery failures)."""

import logging
import sys
from typing import Optional

from msgbus.config import load_settings


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a configured logger; level defaults to MSGBUS_LOG_LEVEL."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
            )
        )
        logger.addHandler(handler)
        logger.setLevel(level if level is not None else load_settings().log_level)
    return logger
