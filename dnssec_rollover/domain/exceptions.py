"""Base exception classes for the rollover domain layer."""


class RolloverError(Exception):
    """Base exception for all rollover errors.

    All package-specific exceptions MUST inherit from this class so the
    run loop can contain per-zone failures with a single handler.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
