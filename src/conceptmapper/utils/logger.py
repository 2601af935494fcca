"""Logging configuration using Loguru."""

import sys

from loguru import logger


def setup_logging(level: str = "WARNING", colorize: bool | None = None) -> None:
    """Route conceptmapper diagnostics to stderr at the given level.

    The package disables its own log records on import; calling this
    re-enables them.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>",
        colorize=colorize,
    )
    logger.enable("conceptmapper")


def get_logger(name: str):
    """Get a logger instance for a module."""
    return logger.bind(module=name)
