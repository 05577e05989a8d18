# accounting/models/ledger.py

"""
======================================================
PATH: accounting/models/ledger.py
======================================================
LEDGER ENTRY MODEL (JOURNAL LINE)

Atomic debit or credit posting to a single account code.

Guarantees:
- Immutable once created (no updates, no row deletes)
- Amount is always positive; direction is via entry_type
- asset_id back-references the cow the line belongs to (the accounting app
  stays independent of the herd app, so this is a plain indexed id)
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from accounting.models.journal import JournalEntry


class LedgerEntry(models.Model):
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"

    ENTRY_TYPES = [
        (DEBIT, "Debit"),
        (CREDIT, "Credit"),
    ]

    journal_entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.PROTECT,
        related_name="ledger_entries",
    )

    account_code = models.CharField(max_length=20)
    account_name = models.CharField(max_length=100, blank=True, default="")

    entry_type = models.CharField(
        max_length=6,
        choices=ENTRY_TYPES,
    )

    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
        help_text="Positive monetary value",
    )

    asset_id = models.BigIntegerField(
        null=True,
        blank=True,
        help_text="Cow this line belongs to (if any)",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Ledger Entry"
        verbose_name_plural = "Ledger Entries"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["account_code"], name="acct_le_account_idx"),
            models.Index(fields=["journal_entry"], name="acct_le_journal_idx"),
            models.Index(fields=["entry_type"], name="acct_le_entry_type_idx"),
            models.Index(fields=["asset_id"], name="acct_le_asset_idx"),
            models.Index(
                fields=["asset_id", "account_code", "entry_type"],
                name="acct_le_asset_acct_type_idx",
            ),
            models.Index(
                fields=["journal_entry", "entry_type"], name="acct_le_journal_type_idx"
            ),
        ]

    def __str__(self):
        return f"{self.entry_type} {self.amount} → {self.account_code}"

    def clean(self):
        if self.entry_type not in (self.DEBIT, self.CREDIT):
            raise ValidationError("Invalid entry_type")

        if not (self.account_code or "").strip():
            raise ValidationError("Ledger account_code is required")

        if self.amount is None or self.amount <= 0:
            raise ValidationError("Ledger amount must be > 0")

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("LedgerEntry records are immutable and cannot be modified")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("LedgerEntry records are immutable and cannot be deleted")
