# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Centralized domain errors for accounting services.

Every failure raised by the accounting + herd engines derives from
AccountingServiceError so API views and management commands can map a single
hierarchy onto HTTP status codes / exit codes.
"""


class AccountingServiceError(Exception):
    """Base exception for all accounting service failures."""

    code = "accounting_error"


class JournalEntryCreationError(AccountingServiceError):
    """Raised when a journal entry cannot be created."""

    code = "journal_entry_invalid"


class IdempotencyError(AccountingServiceError):
    """Raised on duplicate or retried accounting events."""

    code = "duplicate_reference"


class CalculationError(AccountingServiceError):
    """
    Internal precondition failure (unbalanced entry, missing book value,
    non-finite amount). Never caused by user input; blocks the commit.
    """

    code = "calculation_error"

    def __init__(self, message, *, asset_id=None, period=None):
        super().__init__(message)
        self.asset_id = asset_id
        self.period = period


class LedgerStoreError(AccountingServiceError):
    """
    The ledger store rejected a read or write. Every operation runs in a single
    transaction and is idempotent, so callers may retry.
    """

    code = "store_unavailable"
