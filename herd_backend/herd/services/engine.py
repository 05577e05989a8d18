# herd/services/engine.py

"""
======================================================
PATH: herd/services/engine.py
======================================================
HERD DEPRECIATION ENGINE (PUBLIC ENTRYPOINTS)

This module is the ONLY place allowed to start a ledger-changing herd
operation. Each call:
- takes the per-cow lock (in-process) + select_for_update on the cow row
- runs as ONE transaction (all-or-nothing)
- refreshes the cow's cached totals from ledger sums after the ledger write
- translates database failures into LedgerStoreError (safe to retry)

Dates are passed in explicitly. Only API views and management commands
read the clock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.db import DatabaseError, transaction

from accounting.services.balance_validator import validate_entry
from accounting.services.exceptions import AccountingServiceError, LedgerStoreError
from accounting.services.money import ZERO
from herd.config import DepreciationConfig, get_depreciation_config
from herd.repositories.ledger import DjangoLedgerRepository, LedgerRepository
from herd.services.asset_lock import asset_lock
from herd.services.catchup import CatchUpReconciler
from herd.services.disposition import DispositionProcessor

logger = logging.getLogger(__name__)

__all__ = [
    "ReconcileResult",
    "DispositionResult",
    "reconcile_asset",
    "dispose_asset",
    "validate_entry",
]


@dataclass(frozen=True)
class ReconcileResult:
    asset_id: int
    periods_created: int
    entries_created: int
    accumulated_depreciation: Decimal
    current_value: Decimal
    fully_depreciated: bool = False


@dataclass(frozen=True)
class DispositionResult:
    asset_id: int
    disposition_id: int
    journal_entry_id: int
    final_book_value: Decimal
    gain_loss: Decimal
    accumulated_depreciation: Decimal
    partial_month_depreciation: Decimal
    periods_created: int = 0
    lines_removed: int = 0
    entries_removed: int = 0


def _run_locked(asset_id: int, operation: str, work):
    with asset_lock(asset_id):
        try:
            with transaction.atomic():
                return work()
        except AccountingServiceError:
            raise
        except DatabaseError as exc:
            logger.exception("Cow %s: %s failed in the ledger store", asset_id, operation)
            raise LedgerStoreError(f"{operation} failed for cow {asset_id}: {exc}") from exc


def reconcile_asset(
    asset_id: int,
    as_of: date,
    *,
    config: DepreciationConfig | None = None,
    repository: LedgerRepository | None = None,
) -> ReconcileResult:
    config = config or get_depreciation_config()
    repository = repository or DjangoLedgerRepository()
    accum_code = config.accounts.accumulated_depreciation

    def work():
        cow = repository.get_asset(asset_id, for_update=True)
        disposition = repository.find_disposition(asset_id)

        result = CatchUpReconciler(repository, config).reconcile(
            cow,
            as_of=as_of,
            disposition_date=disposition.disposition_date if disposition else None,
        )

        snapshot = repository.ledger_snapshot(asset_id, accum_code)
        repository.update_asset_cache(asset_id, snapshot)

        return ReconcileResult(
            asset_id=asset_id,
            periods_created=result.periods_created,
            entries_created=result.entries_created,
            accumulated_depreciation=snapshot.total_depreciation,
            current_value=snapshot.current_value,
            fully_depreciated=result.fully_depreciated,
        )

    result = _run_locked(asset_id, "reconcile", work)
    if result.periods_created:
        logger.info(
            "Cow %s reconciled as of %s: %d period(s), accumulated=%s",
            asset_id,
            as_of,
            result.periods_created,
            result.accumulated_depreciation,
        )
    return result


def dispose_asset(
    asset_id: int,
    disposition_date: date,
    disposition_type: str,
    sale_amount=ZERO,
    notes: str | None = None,
    *,
    as_of: date | None = None,
    config: DepreciationConfig | None = None,
    repository: LedgerRepository | None = None,
) -> DispositionResult:
    config = config or get_depreciation_config()
    repository = repository or DjangoLedgerRepository()
    as_of = as_of or disposition_date

    def work():
        cow = repository.get_asset(asset_id, for_update=True)
        outcome = DispositionProcessor(repository, config).dispose(
            cow,
            disposition_date=disposition_date,
            disposition_type=disposition_type,
            sale_amount=sale_amount,
            notes=notes,
            as_of=as_of,
        )

        snapshot = repository.ledger_snapshot(
            asset_id, config.accounts.accumulated_depreciation
        )
        repository.update_asset_cache(asset_id, snapshot)

        return DispositionResult(
            asset_id=asset_id,
            disposition_id=outcome.disposition.id,
            journal_entry_id=outcome.disposition.journal_entry_id,
            final_book_value=outcome.final_book_value,
            gain_loss=outcome.gain_loss,
            accumulated_depreciation=outcome.accumulated_depreciation,
            partial_month_depreciation=outcome.partial_month_depreciation,
            periods_created=outcome.catchup.periods_created,
            lines_removed=outcome.cleanup.lines_deleted,
            entries_removed=outcome.cleanup.entries_deleted,
        )

    return _run_locked(asset_id, "dispose", work)
