"""Structured logging configuration (structlog)."""

from __future__ import annotations

import logging
import math
import sys
from pathlib import Path
from typing import Any

import structlog


def configure_structlog(level: int = logging.INFO) -> None:
    """Configure structlog for human-readable output on stderr.

    Call once at process startup.  Logs go to stderr so that report or
    JSON output on stdout stays clean for piping.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def verbosity_to_level(verbose: int) -> int:
    """Map a ``-v`` count onto a stdlib level (0 → WARNING, 1 → INFO, 2+ → DEBUG)."""
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def _null_non_finite(
    _logger: object, _method: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Replace NaN/inf floats with None so every line is strict JSON."""
    return {
        k: None if isinstance(v, float) and not math.isfinite(v) else v
        for k, v in event_dict.items()
    }


def get_json_file_logger(log_path: Path, **context: Any) -> structlog.BoundLogger:
    """Return a structlog logger that appends JSON lines to *log_path*.

    Independent of the console configuration: every summary written
    through it lands in the file regardless of ``-v``.  *context* (for
    example ``metric=...``) is bound onto every line.  Calling again
    for the same path replaces the previous file handler.
    """
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(str(log_path), mode="a")
    file_handler.setLevel(logging.DEBUG)

    stdlib_logger = logging.getLogger(f"timer_stats.{log_path}")
    for old in stdlib_logger.handlers:
        old.close()
    stdlib_logger.handlers = [file_handler]
    stdlib_logger.setLevel(logging.DEBUG)
    stdlib_logger.propagate = False

    return structlog.wrap_logger(
        stdlib_logger,
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _null_non_finite,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
    ).bind(**context)
