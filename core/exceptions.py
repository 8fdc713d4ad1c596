"""
Domain Exceptions

Error taxonomy shared by the scoring primitives, the leg and match
engines and the recalculation driver. Every error carries a short
human readable reason that callers surface as-is.
"""

from typing import Optional


class DartsError(Exception):
    """Base class for all scoring errors."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ValidationError(DartsError):
    """Raised when input is rejected before any state is touched."""

    pass


class NotFoundError(DartsError):
    """Raised when a match, leg, visit or player does not exist."""

    def __init__(self, entity: str, entity_id: Optional[int]):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConsistencyError(DartsError):
    """Raised when an operation does not fit the current leg or match state."""

    pass


class TransactionError(DartsError):
    """Raised when a persistence failure rolled back an operation."""

    def __init__(self, operation: str, cause: Exception):
        super().__init__(f"{operation} failed: {type(cause).__name__}: {cause}")
        self.operation = operation
        self.cause = cause
