"""Exception types for the drill engine."""


class DrillError(Exception):
    """Base class for drill errors."""


class StateError(DrillError):
    """An operation was called in a phase that does not allow it.

    Only raised by a controller created with ``strict=True``; otherwise the
    call is ignored and logged.
    """

    def __init__(self, operation: str, phase: str, reason: str = ""):
        self.operation = operation
        self.phase = phase
        self.reason = reason
        message = f"Cannot {operation} while {phase}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ContentSourceError(DrillError):
    """Content could not be read or imported."""
