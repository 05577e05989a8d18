# herd/repositories/__init__.py

from .ledger import (
    CleanupResult as CleanupResult,
    DjangoLedgerRepository as DjangoLedgerRepository,
    LedgerRepository as LedgerRepository,
    LedgerSnapshot as LedgerSnapshot,
    MonthlyRecordDraft as MonthlyRecordDraft,
)

__all__ = [
    "LedgerRepository",
    "DjangoLedgerRepository",
    "MonthlyRecordDraft",
    "CleanupResult",
    "LedgerSnapshot",
]
