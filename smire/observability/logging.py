"""Structured logging for the analytics tools."""

from __future__ import annotations

import logging
import sys

import structlog


def _level_number(level: str) -> int:
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _stderr_logger(*args) -> structlog.PrintLogger:
    # Resolved per call so redirected or replaced stderr streams are honoured.
    _ = args
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """Configure structlog for the process.

    Logs go to stderr: the stdio MCP transport owns stdout for protocol frames.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_level_number(level)),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(component: str | None = None):
    if component:
        return structlog.get_logger(component=component)
    return structlog.get_logger()
