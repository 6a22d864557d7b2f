"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

from dnssec_rollover.infrastructure.observability import (
    configure_structlog as _configure_structlog,
)
from dnssec_rollover.infrastructure.observability import generate_run_id, set_run_id


def configure_logging(
    verbose: bool = False,
    log_format: str | None = None,
    cache_loggers: bool = True,
) -> str:
    """Configure structlog and start a new run id.

    Args:
        verbose: Lower the level to DEBUG.
        log_format: 'json' or 'console'; LOG_FORMAT if omitted.
        cache_loggers: Freeze each logger on first use.

    Returns:
        The run id bound to every log entry of this invocation.
    """
    _configure_structlog(
        log_format=log_format,
        verbose=verbose,
        cache_logger_on_first_use=cache_loggers,
    )
    run_id = generate_run_id()
    set_run_id(run_id)
    return run_id


__all__ = ["configure_logging"]
