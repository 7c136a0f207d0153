"""Centralized logging configuration."""

import sys
from pathlib import Path

from loguru import logger

log_format = " | ".join(
    (
        "<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{name}:{function}:{line}</>",
        "{message}",
    )
)


def setup_logging(level: str = "INFO", logfile: str | Path | None = None) -> None:
    """Replace loguru's default sink with the project format.

    Safe to call more than once; each call drops the previously installed
    sinks first.
    """
    logger.remove()
    logger.add(sys.stderr, format=log_format, level=level.upper())

    if logfile:
        logger.add(
            str(logfile),
            format=log_format,
            level=level.upper(),
            rotation="1 day",
            retention="30 days",
            enqueue=True,
        )
