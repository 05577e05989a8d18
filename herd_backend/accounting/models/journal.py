# accounting/models/journal.py

"""
======================================================
PATH: accounting/models/journal.py
======================================================
JOURNAL ENTRY MODEL

Represents a single accounting transaction (journal header) for the herd:
acquisition, monthly depreciation (possibly consolidated catch-up) or
disposition.

Guarantees:
- Immutable once created (no row updates, no row deletes)
- Idempotency via reference uniqueness (when reference is provided)
- entry_date is the accounting effective date (used for cleanup + reports)

Removal:
- The ONLY sanctioned removal path is the post-disposition cleanup in the
  ledger repository, which deletes entries through the queryset once all of
  their lines are gone. Model.delete() stays blocked.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q


class JournalEntry(models.Model):
    ACQUISITION = "acquisition"
    DEPRECIATION = "depreciation"
    DISPOSITION = "disposition"

    ENTRY_TYPES = [
        (ACQUISITION, "Acquisition"),
        (DEPRECIATION, "Depreciation"),
        (DISPOSITION, "Disposition"),
    ]

    reference = models.CharField(
        max_length=100,
        blank=True,
        null=True,
        help_text="Idempotency key (e.g. DEPR:<cow>:<first>:<last>, DISP:<cow>)",
    )

    entry_type = models.CharField(max_length=20, choices=ENTRY_TYPES)

    description = models.TextField(help_text="Narrative description of the journal entry")

    entry_date = models.DateField(help_text="Accounting effective date")

    total_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Sum of one side (debits == credits)",
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="Timestamp when the journal entry was created",
    )

    class Meta:
        ordering = ["-entry_date", "-created_at"]
        indexes = [
            models.Index(fields=["entry_date"], name="acct_je_entry_date_idx"),
            models.Index(fields=["entry_type"], name="acct_je_entry_type_idx"),
            models.Index(fields=["reference"], name="acct_je_reference_idx"),
            models.Index(
                fields=["entry_type", "entry_date"], name="acct_je_type_date_idx"
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["reference"],
                condition=Q(reference__isnull=False) & ~Q(reference=""),
                name="uniq_journal_reference_not_blank",
            )
        ]
        verbose_name = "Journal Entry"
        verbose_name_plural = "Journal Entries"

    def __str__(self):
        return f"JournalEntry #{self.id} {self.entry_type} {self.entry_date}"

    def clean(self):
        if self.reference is not None:
            ref = str(self.reference).strip()
            self.reference = ref or None

        self.description = (self.description or "").strip()
        if not self.description:
            raise ValidationError("Journal entry description is required")

        if self.entry_type not in dict(self.ENTRY_TYPES):
            raise ValidationError(f"Invalid entry_type: {self.entry_type!r}")

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("JournalEntry records are immutable once created")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("JournalEntry records are immutable and cannot be deleted")
