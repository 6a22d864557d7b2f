"""Structured logging configuration with structlog.

Log entries go to stderr so that stdout carries nothing but the run's
summary line, which cron mails or wrappers may parse.

Log Entry Format (json):
    {
        "timestamp": "2026-01-01T00:00:00.000000Z",
        "level": "warning",
        "event": "key_create_failed",
        "run_id": "uuid",
        "zone": "example.com",
        ...additional context
    }

Environment Variables:
- LOG_LEVEL: Minimum level when not verbose (default: INFO)
- LOG_FORMAT: "json" or "console" (default: console)

Usage:
    configure_structlog(log_format="json", verbose=False)

    import structlog
    log = structlog.get_logger()
    log.info("event_name", key="value")
"""

import logging
import os
import sys
from typing import TextIO, cast

import structlog
from structlog.typing import Processor

from dnssec_rollover.infrastructure.observability.correlation import run_id_processor

LOG_LEVEL_ENV = "LOG_LEVEL"
LOG_FORMAT_ENV = "LOG_FORMAT"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"


def _get_log_level(verbose: bool) -> int:
    """Resolve the effective log level.

    Args:
        verbose: Force DEBUG regardless of LOG_LEVEL.

    Returns:
        The logging level integer (e.g., logging.INFO).
    """
    if verbose:
        return logging.DEBUG
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_structlog(
    log_format: str | None = None,
    verbose: bool = False,
    stream: TextIO | None = None,
    cache_logger_on_first_use: bool = True,
) -> None:
    """Configure structlog for the rollover job.

    Should be called once at startup, before anything logs.

    Args:
        log_format: 'json' for machine-readable output, 'console' for
            humans. Defaults to LOG_FORMAT or 'console'.
        verbose: Lower the level to DEBUG for per-zone tracing.
        stream: Output stream; stderr if omitted.
        cache_logger_on_first_use: Freeze each logger on first use. Tests that
            swap stderr between runs turn this off.
    """
    log_format = (log_format or os.getenv(LOG_FORMAT_ENV, DEFAULT_LOG_FORMAT)).lower()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        cast(Processor, run_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level(verbose)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=cache_logger_on_first_use,
    )
