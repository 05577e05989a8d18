"""
======================================================
PATH: herd/migrations/0001_initial.py
======================================================
MIGRATION: CREATE Cow, MonthlyDepreciation, CowDisposition

Purpose:
- Cow asset register with ledger-derived cache columns.
- One depreciation row per (cow, year, month).
- One disposition per cow (OneToOne).
"""

from __future__ import annotations

from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("accounting", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Cow",
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
                    "tag_number",
                    models.CharField(
                        max_length=50,
                        unique=True,
                        validators=[django.core.validators.MinLengthValidator(1)],
                    ),
                ),
                ("name", models.CharField(blank=True, default="", max_length=100)),
                ("birth_date", models.DateField(blank=True, null=True)),
                (
                    "freshen_date",
                    models.DateField(help_text="Service start date for depreciation"),
                ),
                (
                    "purchase_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=14,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.01"))
                        ],
                    ),
                ),
                (
                    "salvage_value",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=14,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.00"))
                        ],
                    ),
                ),
                (
                    "depreciation_method",
                    models.CharField(
                        choices=[
                            ("straight-line", "Straight line"),
                            ("declining-balance", "Declining balance (double)"),
                            ("sum-of-years", "Sum of years' digits"),
                        ],
                        default="straight-line",
                        max_length=20,
                    ),
                ),
                (
                    "acquisition_type",
                    models.CharField(
                        choices=[("purchased", "Purchased"), ("raised", "Raised")],
                        default="purchased",
                        max_length=10,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("disposed", "Disposed")],
                        default="active",
                        max_length=10,
                    ),
                ),
                (
                    "total_depreciation",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                (
                    "current_value",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                (
                    "depreciated_through",
                    models.DateField(
                        blank=True,
                        help_text="Last day of the latest month covered by the ledger",
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["tag_number"],
                "indexes": [
                    models.Index(fields=["status"], name="herd_cow_status_idx"),
                    models.Index(fields=["freshen_date"], name="herd_cow_freshen_idx"),
                    models.Index(
                        fields=["status", "depreciated_through"],
                        name="herd_cow_status_through_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="MonthlyDepreciation",
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
                ("year", models.PositiveSmallIntegerField()),
                (
                    "month",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ]
                    ),
                ),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=14,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.01"))
                        ],
                    ),
                ),
                (
                    "accumulated_after",
                    models.DecimalField(decimal_places=2, max_digits=14),
                ),
                (
                    "book_value_after",
                    models.DecimalField(decimal_places=2, max_digits=14),
                ),
                (
                    "is_partial",
                    models.BooleanField(
                        default=False, help_text="Disposition month prorated by day"
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "cow",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="monthly_depreciations",
                        to="herd.cow",
                    ),
                ),
                (
                    "journal_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="monthly_depreciations",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "ordering": ["cow", "year", "month"],
                "indexes": [
                    models.Index(fields=["year", "month"], name="herd_md_period_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("cow", "year", "month"),
                        name="uniq_monthly_depreciation_period",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="CowDisposition",
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
                ("disposition_date", models.DateField()),
                (
                    "disposition_type",
                    models.CharField(
                        choices=[
                            ("sale", "Sale"),
                            ("death", "Death"),
                            ("culled", "Culled"),
                        ],
                        max_length=10,
                    ),
                ),
                (
                    "sale_amount",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=14,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.00"))
                        ],
                    ),
                ),
                (
                    "accumulated_depreciation",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Ledger-derived accumulated depreciation through the disposition date",
                        max_digits=14,
                    ),
                ),
                (
                    "partial_month_depreciation",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                (
                    "final_book_value",
                    models.DecimalField(decimal_places=2, max_digits=14),
                ),
                ("gain_loss", models.DecimalField(decimal_places=2, max_digits=14)),
                (
                    "notes",
                    models.TextField(blank=True, default="", max_length=500),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "cow",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="disposition",
                        to="herd.cow",
                    ),
                ),
                (
                    "journal_entry",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="cow_disposition",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "ordering": ["-disposition_date"],
                "indexes": [
                    models.Index(
                        fields=["disposition_date"], name="herd_disp_date_idx"
                    ),
                    models.Index(
                        fields=["disposition_type"], name="herd_disp_type_idx"
                    ),
                ],
            },
        ),
    ]
