# herd/models/monthly_depreciation.py

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class MonthlyDepreciation(models.Model):
    """
    One row per (cow, year, month) that has been depreciated.

    Rows are the idempotency record for catch-up: a period with a row is never
    posted again. Several rows may share one consolidated journal entry.

    Immutable once created. The only removal path is post-disposition cleanup
    (queryset delete in the ledger repository).
    """

    cow = models.ForeignKey(
        "herd.Cow",
        on_delete=models.PROTECT,
        related_name="monthly_depreciations",
    )
    year = models.PositiveSmallIntegerField()
    month = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(12)]
    )

    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    accumulated_after = models.DecimalField(max_digits=14, decimal_places=2)
    book_value_after = models.DecimalField(max_digits=14, decimal_places=2)
    is_partial = models.BooleanField(
        default=False,
        help_text="Disposition month prorated by day",
    )

    journal_entry = models.ForeignKey(
        "accounting.JournalEntry",
        on_delete=models.PROTECT,
        related_name="monthly_depreciations",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["cow", "year", "month"]
        constraints = [
            models.UniqueConstraint(
                fields=["cow", "year", "month"],
                name="uniq_monthly_depreciation_period",
            )
        ]
        indexes = [
            models.Index(fields=["year", "month"], name="herd_md_period_idx"),
        ]

    def __str__(self):
        return f"{self.cow_id} {self.year:04d}-{self.month:02d}: {self.amount}"

    @property
    def period(self) -> tuple[int, int]:
        return (self.year, self.month)

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("MonthlyDepreciation records are immutable once created")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("MonthlyDepreciation records cannot be deleted individually")
