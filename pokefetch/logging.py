"""
Loguru setup for PokeFetch.

Every module logs through one colored stderr sink at DEBUG, so cache hits and
stores from the transport show up next to the fetch lines from the service.
"""
from __future__ import annotations

import sys
from typing import Any

from loguru import logger

logger.remove()

logger.add(
    sys.stderr,
    format=(
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    ),
    level="DEBUG",
    colorize=True,
)

# Fallback for records logged without get_logger(), which the format needs
logger.configure(extra={"name": "pokefetch"})


def get_logger(name: str = __name__) -> Any:
    """
    Return the shared logger with `name` bound, shown as the record's source.

    Usage:
        from pokefetch.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Fetching Pokemon with ID: 25")
    """
    return logger.bind(name=name)
