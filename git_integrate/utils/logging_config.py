"""
Logging configuration using structlog.

Logs go to stderr so that stdout carries only git's output and the
operator messages printed by the command.
"""

import sys
from typing import Any

import structlog


def configure_logging(log_level: str = "WARNING", json_output: bool | None = None) -> None:
    """Configure structured logging.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render JSON lines instead of the console format.
            Defaults to JSON when stderr is not a terminal.
    """
    if json_output is None:
        json_output = not sys.stderr.isatty()

    renderer: Any = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level.upper()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
