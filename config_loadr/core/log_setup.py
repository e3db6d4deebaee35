"""Structured logging configuration."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog


def _resolve_log_level(level: str | None) -> int:
    candidate = (level or "info").upper()
    value = logging.getLevelName(candidate)
    return value if isinstance(value, int) else logging.INFO


def configure_logging(
    level: str | None = "info",
    stdout_format: str = "console",
    stream: TextIO | None = None,
) -> None:
    """Route structlog through the stdlib root logger.

    Log output goes to stderr by default so it never mixes with command output.
    """
    min_level = _resolve_log_level(level)
    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # module-level loggers must follow a later reconfigure
        cache_logger_on_first_use=False,
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            timestamper,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
    )

    if stdout_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    root_logger = logging.getLogger()
    root_logger.setLevel(min_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(min_level)
    console_handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer))
    root_logger.addHandler(console_handler)


__all__ = ["configure_logging"]
