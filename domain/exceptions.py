"""Domain-specific exceptions.

Custom exceptions provide better error handling and clearer intent
than generic exceptions.
"""

from decimal import Decimal
from typing import Optional


class SourdoughError(Exception):
    """Base exception for all application errors."""


# ============================================================================
# Domain Errors
# ============================================================================


class InvalidInputError(SourdoughError, ValueError):
    """Raised when a numeric input is malformed or out of domain."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class UnachievableError(SourdoughError):
    """Raised when a valid request has no solution in range.

    Carries the achievable range (low, high) when one exists so callers
    can display it.
    """

    def __init__(
        self,
        message: str,
        achievable_range: Optional[tuple[Decimal, Decimal]] = None,
    ) -> None:
        super().__init__(message)
        self.achievable_range = achievable_range


# ============================================================================
# Persistence Errors
# ============================================================================


class PersistenceError(SourdoughError):
    """Base exception for persistence-related errors."""


class RecordNotFoundError(PersistenceError):
    """Raised when a stored record does not exist."""


class InvalidRecordFileError(PersistenceError):
    """Raised when a record file is malformed."""


class ExportError(PersistenceError):
    """Raised when export operation fails."""
