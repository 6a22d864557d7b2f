"""Run correlation id management.

Every log entry of one invocation carries the same ``run_id`` so a daily
run can be pulled out of aggregated logs as a unit. The id lives in a
contextvar and is injected by a structlog processor.

Usage:
    # At startup
    set_run_id(generate_run_id())

    # In structlog configuration
    processors = [..., run_id_processor, ...]
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4

# Default is empty string to avoid None type issues
_run_id: ContextVar[str] = ContextVar("run_id", default="")


def generate_run_id() -> str:
    """Generate a new run id (UUID4)."""
    return str(uuid4())


def get_run_id() -> str:
    """Get the current run id, or an empty string if none was set."""
    return _run_id.get()


def set_run_id(run_id: str) -> None:
    """Set the run id for the current context.

    Args:
        run_id: The run id to set.
    """
    _run_id.set(run_id)


def run_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor to add run_id to every log entry.

    Args:
        logger: The logger instance (unused, required by structlog).
        method_name: The logging method name (unused, required by structlog).
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with run_id added.
    """
    run_id = get_run_id()
    if run_id:
        event_dict["run_id"] = run_id
    return event_dict
