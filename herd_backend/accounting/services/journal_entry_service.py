# accounting/services/journal_entry_service.py

"""
======================================================
PATH: accounting/services/journal_entry_service.py
======================================================
JOURNAL ENTRY SERVICE (ACCOUNTING ENGINE)

This module is the ONLY place allowed to:
- Create JournalEntry
- Create LedgerEntry
- Enforce debit == credit
- Guarantee atomicity
- Enforce idempotency via reference (prevents double-posting)

Everything else (acquisition, depreciation catch-up, disposition) must pass
through here, usually via the herd ledger repository.
"""

from __future__ import annotations

import logging
from datetime import date

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry
from accounting.services.balance_validator import validate_entry
from accounting.services.exceptions import (
    CalculationError,
    IdempotencyError,
    JournalEntryCreationError,
)
from accounting.services.journal_builder import JournalEntryDraft
from accounting.services.money import round_to_cent

logger = logging.getLogger(__name__)


def _normalize_reference(
    reference_type: str | None, reference_id: str | None
) -> str | None:
    if not reference_type or not reference_id:
        return None

    rt = str(reference_type).strip()
    rid = str(reference_id).strip()
    if not rt or not rid:
        return None

    ref = f"{rt}:{rid}"
    if ref.startswith(":") or ref.endswith(":"):
        raise JournalEntryCreationError("Invalid reference_type/reference_id")

    return ref


def _normalize_postings(postings: list) -> list[dict]:
    normalized: list[dict] = []

    for line in postings:
        if not isinstance(line, dict):
            raise JournalEntryCreationError("Each posting must be an object/dict")

        account = str(line.get("account") or "").strip()
        if not account:
            raise JournalEntryCreationError("Posting missing account")

        try:
            debit = round_to_cent(line.get("debit"))
            credit = round_to_cent(line.get("credit"))
        except CalculationError as exc:
            raise JournalEntryCreationError(str(exc)) from exc

        if debit < 0 or credit < 0:
            raise JournalEntryCreationError("Debit or credit cannot be negative")

        if debit > 0 and credit > 0:
            raise JournalEntryCreationError(
                "A posting cannot have both debit and credit"
            )

        if debit == 0 and credit == 0:
            raise JournalEntryCreationError(
                "A posting must have either debit or credit"
            )

        normalized.append(
            {
                "account": account,
                "name": str(line.get("name") or "").strip(),
                "debit": debit,
                "credit": credit,
            }
        )

    return normalized


@transaction.atomic
def create_journal_entry(
    *,
    description: str,
    postings: list,
    entry_type: str,
    entry_date: date,
    reference_type: str | None = None,
    reference_id: str | None = None,
    asset_id: int | None = None,
) -> JournalEntry:
    if not postings:
        raise JournalEntryCreationError(
            "Journal entry must contain at least one posting"
        )

    description = (description or "").strip()
    if not description:
        raise JournalEntryCreationError("Journal entry description is required")

    if entry_date is None:
        raise JournalEntryCreationError("Journal entry date is required")

    reference = _normalize_reference(reference_type, reference_id)
    normalized_postings = _normalize_postings(postings)

    # Raises CalculationError: an unbalanced draft is an engine bug, not bad input.
    validate_entry(normalized_postings)
    total_amount = round_to_cent(sum(p["debit"] for p in normalized_postings))

    # Clear error before DB constraint race handling
    if reference and JournalEntry.objects.filter(reference=reference).exists():
        raise IdempotencyError(
            f"Journal entry already exists for reference {reference}"
        )

    try:
        with transaction.atomic():
            journal_entry = JournalEntry.objects.create(
                description=description,
                reference=reference,
                entry_type=entry_type,
                entry_date=entry_date,
                total_amount=total_amount,
            )
    except IntegrityError as exc:
        if reference and JournalEntry.objects.filter(reference=reference).exists():
            raise IdempotencyError(
                f"Journal entry already exists for reference {reference}"
            ) from exc
        raise JournalEntryCreationError(
            f"Failed to create journal entry: {exc}"
        ) from exc
    except DjangoValidationError as exc:
        raise JournalEntryCreationError(
            f"Invalid journal entry: {'; '.join(exc.messages)}"
        ) from exc

    ledger_entries: list[LedgerEntry] = []
    for line in normalized_postings:
        if line["debit"] > 0:
            side, amount = LedgerEntry.DEBIT, line["debit"]
        else:
            side, amount = LedgerEntry.CREDIT, line["credit"]

        ledger_entries.append(
            LedgerEntry(
                journal_entry=journal_entry,
                account_code=line["account"],
                account_name=line["name"],
                entry_type=side,
                amount=amount,
                asset_id=asset_id,
            )
        )

    LedgerEntry.objects.bulk_create(ledger_entries)

    logger.debug(
        "Posted journal entry %s (%s, %s) total=%s lines=%d",
        journal_entry.id,
        entry_type,
        reference or "no-ref",
        total_amount,
        len(ledger_entries),
    )
    return journal_entry


def post_draft(draft: JournalEntryDraft) -> JournalEntry:
    return create_journal_entry(
        description=draft.description,
        postings=draft.postings,
        entry_type=draft.entry_type,
        entry_date=draft.entry_date,
        reference_type=draft.reference_type,
        reference_id=draft.reference_id,
        asset_id=draft.asset_id,
    )
