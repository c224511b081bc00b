"""Structured logging utilities using structlog for session and store events."""

import sys
from typing import Any, Optional

import structlog
from structlog.contextvars import bound_contextvars, merge_contextvars
from structlog.processors import JSONRenderer

from verification_system.config.settings import settings


def configure_structured_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure structured logging with appropriate processors and renderers.

    Uses:
    - Console renderer for development (colorized, human-readable)
    - JSON renderer for production (structured, machine-readable)
    - Context binding for verification_id and requester_id
    """
    level = (log_level or settings.log_level).upper()
    fmt = (log_format or settings.log_format).lower()

    processors: list[Any] = [
        merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if sys.stderr.isatty() and fmt == "console":
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    else:
        processors.append(JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def request_context(verification_id: str, requester_id: Optional[str] = None, **extra: Any):
    """
    Bind request identifiers to every structlog event emitted inside the block.

    Tasks created inside the block inherit the binding; previous values are
    restored on exit.

    Example:
        >>> with request_context("3f0c-...", requester_id="tg:42"):
        ...     structlog.get_logger().info("session_saved")
    """
    context = {"verification_id": verification_id, **extra}
    if requester_id:
        context["requester_id"] = requester_id
    return bound_contextvars(**context)


__all__ = [
    "configure_structured_logging",
    "request_context",
]
