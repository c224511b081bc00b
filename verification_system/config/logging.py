"""Loguru sinks for component logs (analyzers, selector, orchestrator, CLI)."""

import sys
from typing import Optional, TextIO

from loguru import logger

from verification_system.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | <level>{message}</level>"
)


def configure_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    sink: Optional[TextIO] = None,
) -> None:
    """
    Replace loguru's sinks with one console or JSON sink.

    Console output is only used on a TTY with log_format "console"; anything
    else is serialized to JSON so bot and web deployments get parseable logs.
    Component fields bound with get_logger() land in the JSON "extra" record.

    Args:
        log_level: Overrides settings.log_level
        log_format: Overrides settings.log_format ("json" or "console")
        sink: Stream to write to (stderr for console, stdout for JSON if None)
    """
    level = (log_level or settings.log_level).upper()
    fmt = (log_format or settings.log_format).lower()

    logger.remove()

    if fmt == "console" and sys.stderr.isatty():
        logger.add(sink or sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)
    else:
        logger.add(sink or sys.stdout, format="{message}", level=level, serialize=True, diagnose=False)


def get_logger(component: str):
    """
    Get a logger bound to a component name.

    Example:
        >>> log = get_logger("cli")
        >>> log.info("Verification started")
    """
    return logger.bind(component=component)


# CONSOLE_FORMAT references extra[component]; default it for unbound calls
logger.configure(extra={"component": "verification_system"})
configure_logging()

__all__ = ["logger", "get_logger", "configure_logging"]
