# herd/services/exceptions.py

"""
HERD SERVICE ERRORS

Extends the accounting error hierarchy with herd-specific failures.

    AccountingServiceError
    ├── CalculationError          (accounting; internal precondition)
    ├── LedgerStoreError          (accounting; retryable)
    └── HerdServiceError
        ├── CowValidationError    (bad input, never retried)
        ├── CowNotFoundError
        └── DispositionConflictError
"""

from accounting.services.exceptions import (
    AccountingServiceError,
    CalculationError,
    LedgerStoreError,
)

__all__ = [
    "AccountingServiceError",
    "CalculationError",
    "LedgerStoreError",
    "HerdServiceError",
    "CowValidationError",
    "CowNotFoundError",
    "DispositionConflictError",
]


class HerdServiceError(AccountingServiceError):
    """Base exception for herd service failures."""

    code = "herd_error"


class CowValidationError(HerdServiceError):
    """Raised when caller-supplied cow or disposition data is invalid."""

    code = "validation_error"

    def __init__(self, message, *, field=None):
        super().__init__(message)
        self.field = field


class CowNotFoundError(HerdServiceError):
    code = "not_found"


class DispositionConflictError(HerdServiceError):
    """Raised when a cow already has a disposition."""

    code = "disposition_exists"
