"""Structured logging using structlog.

Importing fstree never touches the global structlog configuration: events go
through whatever the host application configured. ``setup_logging`` installs
a console configuration for callers that want one.
"""

from __future__ import annotations

import logging
import sys

import structlog

from .config import SETTINGS


def setup_logging(level: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Configure structlog with console output on stderr, filtered at ``level``.

    ``level`` defaults to FSTREE_LOG_LEVEL.
    """
    level = level or SETTINGS.log_level
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.WARNING)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    return structlog.get_logger("fstree")


logger: structlog.typing.FilteringBoundLogger = structlog.get_logger("fstree")
