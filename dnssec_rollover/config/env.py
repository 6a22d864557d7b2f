"""Environment helpers shared by the configuration loaders."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv


def load_dotenv_file(start: Path | None = None) -> Path | None:
    """Load a .env file from the working directory or its parent.

    Variables already present in the process environment are not
    overridden.

    Args:
        start: Directory to look in first (defaults to the working directory).

    Returns:
        Path of the loaded file, or None if there was none.
    """
    base = start or Path.cwd()
    for candidate in (base / ".env", base.parent / ".env"):
        if candidate.exists():
            load_dotenv(candidate, override=False)
            return candidate
    return None


def get_int_env(environ: Mapping[str, str], key: str, default: int) -> int:
    """Get a positive integer environment variable with default.

    A missing, non-integer or non-positive value yields the default.

    Args:
        environ: Environment mapping to read.
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = environ.get(key)
    if value is None:
        return default
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def get_str_env(environ: Mapping[str, str], key: str, default: str) -> str:
    """Get a string environment variable, treating empty as unset."""
    value = environ.get(key, "").strip()
    return value or default


def current_environ() -> Mapping[str, str]:
    """Return the process environment."""
    return os.environ
