# herd/repositories/ledger.py

"""
======================================================
PATH: herd/repositories/ledger.py
======================================================
LEDGER REPOSITORY

The depreciation engine reads and writes the ledger ONLY through this
interface. LedgerRepository is the contract; DjangoLedgerRepository is the
ORM-backed implementation used in production and tests.

Rules:
- Callers own the transaction (herd.services.engine wraps each operation
  in transaction.atomic). Methods here never commit on their own.
- Journal writes go through accounting.services.journal_entry_service so
  balance + idempotency checks cannot be bypassed.
- delete_lines_and_empty_entries_after() is the single sanctioned removal
  path for journal data (post-disposition cleanup).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.db.models import Sum
from django.utils import timezone

from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry
from accounting.services.journal_builder import JournalEntryDraft
from accounting.services.journal_entry_service import post_draft
from accounting.services.money import ZERO, round_to_cent
from herd.models import Cow, CowDisposition, MonthlyDepreciation
from herd.services.exceptions import CowNotFoundError, DispositionConflictError
from herd.services.schedule import Period

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlyRecordDraft:
    year: int
    month: int
    amount: Decimal
    accumulated_after: Decimal
    book_value_after: Decimal
    is_partial: bool = False


@dataclass(frozen=True)
class CleanupResult:
    records_deleted: int = 0
    lines_deleted: int = 0
    entries_deleted: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.records_deleted or self.lines_deleted or self.entries_deleted)


@dataclass(frozen=True)
class LedgerSnapshot:
    total_depreciation: Decimal
    current_value: Decimal
    depreciated_through: date | None


class LedgerRepository(ABC):
    @abstractmethod
    def get_asset(self, asset_id: int, *, for_update: bool = False) -> Cow: ...

    @abstractmethod
    def find_monthly_record(
        self, asset_id: int, year: int, month: int
    ) -> MonthlyDepreciation | None: ...

    @abstractmethod
    def list_monthly_records(self, asset_id: int) -> list[MonthlyDepreciation]: ...

    @abstractmethod
    def insert_monthly_records(
        self,
        asset_id: int,
        records: list[MonthlyRecordDraft],
        journal_entry: JournalEntry,
    ) -> list[MonthlyDepreciation]: ...

    @abstractmethod
    def insert_journal_entry_with_lines(self, draft: JournalEntryDraft) -> JournalEntry: ...

    @abstractmethod
    def sum_credits_for_asset(
        self, asset_id: int, account_code: str, through_date: date | None = None
    ) -> Decimal: ...

    @abstractmethod
    def delete_lines_and_empty_entries_after(
        self, asset_id: int, after_date: date
    ) -> CleanupResult: ...

    @abstractmethod
    def find_disposition(self, asset_id: int) -> CowDisposition | None: ...

    @abstractmethod
    def insert_disposition(self, asset_id: int, **values) -> CowDisposition: ...

    @abstractmethod
    def update_asset_status(self, asset_id: int, status: str) -> None: ...

    @abstractmethod
    def ledger_snapshot(self, asset_id: int, account_code: str) -> LedgerSnapshot: ...

    @abstractmethod
    def update_asset_cache(self, asset_id: int, snapshot: LedgerSnapshot) -> None: ...


class DjangoLedgerRepository(LedgerRepository):
    def get_asset(self, asset_id, *, for_update=False):
        qs = Cow.objects.all()
        if for_update:
            qs = qs.select_for_update()
        try:
            return qs.get(pk=asset_id)
        except Cow.DoesNotExist as exc:
            raise CowNotFoundError(f"Cow {asset_id} not found") from exc

    def find_monthly_record(self, asset_id, year, month):
        return MonthlyDepreciation.objects.filter(
            cow_id=asset_id, year=year, month=month
        ).first()

    def list_monthly_records(self, asset_id):
        return list(
            MonthlyDepreciation.objects.filter(cow_id=asset_id).order_by("year", "month")
        )

    def insert_monthly_records(self, asset_id, records, journal_entry):
        rows = [
            MonthlyDepreciation(
                cow_id=asset_id,
                year=r.year,
                month=r.month,
                amount=r.amount,
                accumulated_after=r.accumulated_after,
                book_value_after=r.book_value_after,
                is_partial=r.is_partial,
                journal_entry=journal_entry,
            )
            for r in records
        ]
        return MonthlyDepreciation.objects.bulk_create(rows)

    def insert_journal_entry_with_lines(self, draft):
        return post_draft(draft)

    def sum_credits_for_asset(self, asset_id, account_code, through_date=None):
        qs = LedgerEntry.objects.filter(
            asset_id=asset_id,
            account_code=account_code,
            entry_type=LedgerEntry.CREDIT,
            journal_entry__entry_type=JournalEntry.DEPRECIATION,
        )
        if through_date is not None:
            qs = qs.filter(journal_entry__entry_date__lte=through_date)

        total = qs.aggregate(total=Sum("amount")).get("total")
        return round_to_cent(total or ZERO)

    def delete_lines_and_empty_entries_after(self, asset_id, after_date):
        entry_ids = list(
            JournalEntry.objects.filter(
                ledger_entries__asset_id=asset_id,
                entry_date__gt=after_date,
            )
            .order_by()
            .values_list("id", flat=True)
            .distinct()
        )
        if not entry_ids:
            return CleanupResult()

        # Monthly rows point at the entries (PROTECT), so they go first.
        records_deleted, _ = MonthlyDepreciation.objects.filter(
            cow_id=asset_id, journal_entry_id__in=entry_ids
        ).delete()
        lines_deleted, _ = LedgerEntry.objects.filter(
            asset_id=asset_id, journal_entry_id__in=entry_ids
        ).delete()
        entries_deleted, _ = JournalEntry.objects.filter(
            id__in=entry_ids, ledger_entries__isnull=True
        ).delete()

        result = CleanupResult(
            records_deleted=records_deleted,
            lines_deleted=lines_deleted,
            entries_deleted=entries_deleted,
        )
        logger.info(
            "Cow %s: removed ledger data dated after %s (records=%d lines=%d entries=%d)",
            asset_id,
            after_date,
            result.records_deleted,
            result.lines_deleted,
            result.entries_deleted,
        )
        return result

    def find_disposition(self, asset_id):
        return CowDisposition.objects.filter(cow_id=asset_id).first()

    def insert_disposition(self, asset_id, **values):
        try:
            with transaction.atomic():
                return CowDisposition.objects.create(cow_id=asset_id, **values)
        except IntegrityError as exc:
            if CowDisposition.objects.filter(cow_id=asset_id).exists():
                raise DispositionConflictError(
                    f"Cow {asset_id} already has a disposition"
                ) from exc
            raise

    def update_asset_status(self, asset_id, status):
        Cow.objects.filter(pk=asset_id).update(status=status, updated_at=timezone.now())

    def ledger_snapshot(self, asset_id, account_code):
        cow = self.get_asset(asset_id)
        disposition = self.find_disposition(asset_id)
        latest = (
            MonthlyDepreciation.objects.filter(cow_id=asset_id)
            .order_by("-year", "-month")
            .first()
        )

        if disposition is not None:
            current_value = disposition.final_book_value
            total = round_to_cent(cow.purchase_price - current_value)
        else:
            total = self.sum_credits_for_asset(asset_id, account_code)
            current_value = round_to_cent(cow.purchase_price - total)

        through = None
        if latest is not None:
            if latest.is_partial and disposition is not None:
                through = disposition.disposition_date
            else:
                through = Period(latest.year, latest.month).last_day

        return LedgerSnapshot(
            total_depreciation=total,
            current_value=current_value,
            depreciated_through=through,
        )

    def update_asset_cache(self, asset_id, snapshot):
        Cow.objects.filter(pk=asset_id).update(
            total_depreciation=snapshot.total_depreciation,
            current_value=snapshot.current_value,
            depreciated_through=snapshot.depreciated_through,
            updated_at=timezone.now(),
        )
