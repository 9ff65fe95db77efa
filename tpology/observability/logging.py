"""Structured logging for tpology, always written to stderr.

stdout carries command output (tables, dumps, DOT) and is never logged to.
A terminal gets structlog's console renderer; anything else (pipes, files,
CI logs) gets one JSON object per line.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

LOG_FORMATS = ("auto", "json", "console")


def _wants_json(fmt: str, stream: TextIO) -> bool:
    if fmt == "auto":
        return not stream.isatty()
    return fmt == "json"


def setup_logging(level: str = "warning", fmt: str = "auto", stream: TextIO | None = None) -> None:
    """Point structlog at *stream* (stderr by default) at *level*.

    *fmt* is one of ``LOG_FORMATS``. Loggers are not cached, so calling this
    again (once per CLI invocation) rebinds every module-level logger.
    """
    if fmt not in LOG_FORMATS:
        raise ValueError(f"Invalid log format: {fmt}. Must be one of {LOG_FORMATS}")
    out = stream if stream is not None else sys.stderr
    log_level = getattr(logging, level.upper(), logging.WARNING)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]
    if _wants_json(fmt, out):
        processors += [
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors += [
            structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False),
            structlog.dev.ConsoleRenderer(colors=out.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=out),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
