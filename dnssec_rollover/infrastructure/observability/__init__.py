"""Observability infrastructure for structured logging and run correlation.

This module provides cross-cutting observability concerns:
- Structured logging with structlog (JSON or console rendering)
- A run id shared by every log entry of one invocation

Usage:
    from dnssec_rollover.infrastructure.observability import (
        configure_structlog,
        generate_run_id,
        set_run_id,
    )

    # At startup
    configure_structlog(log_format="json", verbose=args.verbose)
    set_run_id(generate_run_id())
"""

from dnssec_rollover.infrastructure.observability.correlation import (
    generate_run_id,
    get_run_id,
    run_id_processor,
    set_run_id,
)
from dnssec_rollover.infrastructure.observability.logging import configure_structlog

__all__: list[str] = [
    "configure_structlog",
    "generate_run_id",
    "get_run_id",
    "run_id_processor",
    "set_run_id",
]
