"""Exceptions shared by the model and the engine."""

from enum import Enum


class InvariantError(RuntimeError):
    """Raised when the data model is internally inconsistent.

    These are logic faults, not player mistakes. The engine never catches
    them, so the whole turn aborts.
    """


class OrderErrorType(Enum):
    """Classification of order execution errors."""
    LOOKUP = "lookup"
    OWNERSHIP = "ownership"


class OrderError(Exception):
    """Raised when a single order cannot be applied to the game state."""

    def __init__(self, error_type: OrderErrorType, message: str):
        """Initialize order error.

        Args:
            error_type: Classification of the error
            message: Human-readable error message
        """
        self.error_type = error_type
        self.message = message
        super().__init__(message)
