"""Logging configuration."""

import logging
from typing import Optional


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def parse_log_level(level_name: Optional[str]) -> int:
    """Map a level name like "debug" to a logging level, defaulting to INFO."""
    if not level_name:
        return logging.INFO

    level = logging.getLevelName(level_name.strip().upper())
    if not isinstance(level, int):
        return logging.INFO
    return level


def configure_logging(level_name: Optional[str] = None) -> int:
    """
    Configure process logging for applications embedding the webhook service.

    Unknown level names fall back to INFO. Returns the level applied.
    """
    level = parse_log_level(level_name)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("ironhook").setLevel(level)
    return level
