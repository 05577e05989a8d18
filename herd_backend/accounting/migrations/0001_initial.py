"""
======================================================
PATH: accounting/migrations/0001_initial.py
======================================================
MIGRATION: CREATE JournalEntry + LedgerEntry

Purpose:
- Append-only journal headers with unique (non-blank) references.
- Journal lines keyed by account code with an optional asset back-reference.
"""

from __future__ import annotations

from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="JournalEntry",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "reference",
                    models.CharField(
                        blank=True,
                        help_text="Idempotency key (e.g. DEPR:<cow>:<first>:<last>, DISP:<cow>)",
                        max_length=100,
                        null=True,
                    ),
                ),
                (
                    "entry_type",
                    models.CharField(
                        choices=[
                            ("acquisition", "Acquisition"),
                            ("depreciation", "Depreciation"),
                            ("disposition", "Disposition"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "description",
                    models.TextField(
                        help_text="Narrative description of the journal entry"
                    ),
                ),
                (
                    "entry_date",
                    models.DateField(help_text="Accounting effective date"),
                ),
                (
                    "total_amount",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Sum of one side (debits == credits)",
                        max_digits=14,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.00"))
                        ],
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        help_text="Timestamp when the journal entry was created",
                    ),
                ),
            ],
            options={
                "verbose_name": "Journal Entry",
                "verbose_name_plural": "Journal Entries",
                "ordering": ["-entry_date", "-created_at"],
                "indexes": [
                    models.Index(
                        fields=["entry_date"], name="acct_je_entry_date_idx"
                    ),
                    models.Index(
                        fields=["entry_type"], name="acct_je_entry_type_idx"
                    ),
                    models.Index(
                        fields=["reference"], name="acct_je_reference_idx"
                    ),
                    models.Index(
                        fields=["entry_type", "entry_date"],
                        name="acct_je_type_date_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(
                            ("reference__isnull", False),
                            models.Q(("reference", ""), _negated=True),
                        ),
                        fields=("reference",),
                        name="uniq_journal_reference_not_blank",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("account_code", models.CharField(max_length=20)),
                (
                    "account_name",
                    models.CharField(blank=True, default="", max_length=100),
                ),
                (
                    "entry_type",
                    models.CharField(
                        choices=[("DEBIT", "Debit"), ("CREDIT", "Credit")],
                        max_length=6,
                    ),
                ),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Positive monetary value",
                        max_digits=14,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.01"))
                        ],
                    ),
                ),
                (
                    "asset_id",
                    models.BigIntegerField(
                        blank=True,
                        help_text="Cow this line belongs to (if any)",
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "journal_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entries",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "verbose_name": "Ledger Entry",
                "verbose_name_plural": "Ledger Entries",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["account_code"], name="acct_le_account_idx"
                    ),
                    models.Index(
                        fields=["journal_entry"], name="acct_le_journal_idx"
                    ),
                    models.Index(
                        fields=["entry_type"], name="acct_le_entry_type_idx"
                    ),
                    models.Index(
                        fields=["asset_id"], name="acct_le_asset_idx"
                    ),
                    models.Index(
                        fields=["asset_id", "account_code", "entry_type"],
                        name="acct_le_asset_acct_type_idx",
                    ),
                    models.Index(
                        fields=["journal_entry", "entry_type"],
                        name="acct_le_journal_type_idx",
                    ),
                ],
            },
        ),
    ]
