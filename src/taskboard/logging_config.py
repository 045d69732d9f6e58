"""Logging setup for Taskboard."""

import sys

from loguru import logger

from taskboard.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure loguru for the server and the terminal client.

    The default loguru handler is replaced by a single stderr sink using the
    level and format from settings.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.logging_level.upper(),
        format=settings.logging_format,
        colorize=None,
        backtrace=settings.debug,
        diagnose=settings.debug,
    )

    logger.configure(extra={"app": settings.app_name, "version": settings.app_version})

    logger.debug("Logging initialized at level {}", settings.logging_level)
