"""Logging configuration for dcmview.

pydicom reports through the standard ``logging`` module; its records are
forwarded to loguru so that everything ends up on the same stderr sink.
"""

import logging
import sys

from loguru import logger

# Libraries whose stdlib log records are forwarded to loguru.
FORWARDED_LOGGERS = ("pydicom",)


class _ForwardHandler(logging.Handler):
    """Hand stdlib log records over to loguru, keeping level and caller."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(*, verbose: bool = False) -> None:
    """Configure loguru with appropriate level and forward library logs to it."""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level, format="{level.icon} {message}")

    for name in FORWARDED_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [_ForwardHandler()]
        stdlib_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
        stdlib_logger.propagate = False
