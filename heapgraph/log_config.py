"""Centralized structured logging configuration using structlog.

Library modules only call ``structlog.get_logger(__name__)``; applications
embedding heapgraph (and the ``heapgraph`` command) call
:func:`configure_logging` once to choose the level and renderer. Log output
goes to stderr so it never mixes with results printed on stdout.

Example:
    >>> from heapgraph.log_config import configure_logging, get_logger
    >>> configure_logging(level="INFO")
    >>> logger = get_logger(__name__)
    >>> logger.info("graph_loaded", vertex_count=4)
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """Route heapgraph's structlog events through stdlib logging on stderr.

    Events below ``level`` are dropped before rendering. Each surviving event
    gets its level, an ISO timestamp, the emitting module/function/line and any
    bound context, then is rendered as one JSON object per line or as plain
    console text.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL),
            case-insensitive
        json_logs: True for JSON lines, False for uncoloured console output

    Raises:
        ValueError: If an invalid log level is provided
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        msg = f"Invalid log level: {level}"
        raise ValueError(msg)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.contextvars.merge_contextvars,
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        )

    # Not cached: module-level loggers must pick up later reconfiguration.
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach key/value pairs to every event logged until :func:`clear_context`.

    Example:
        >>> bind_context(graph_file="courses.txt")
        >>> logger.info("sort_started")  # carries graph_file
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
