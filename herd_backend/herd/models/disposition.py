# herd/models/disposition.py

"""
COW DISPOSITION

At most one per cow (OneToOne = DB unique constraint, the backstop behind the
per-cow lock). Immutable once created.

gain_loss = sale_amount - final_book_value (negative = loss)
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


class CowDisposition(models.Model):
    SALE = "sale"
    DEATH = "death"
    CULLED = "culled"

    DISPOSITION_TYPES = [
        (SALE, "Sale"),
        (DEATH, "Death"),
        (CULLED, "Culled"),
    ]

    cow = models.OneToOneField(
        "herd.Cow",
        on_delete=models.PROTECT,
        related_name="disposition",
    )
    disposition_date = models.DateField()
    disposition_type = models.CharField(max_length=10, choices=DISPOSITION_TYPES)

    sale_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    accumulated_depreciation = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        help_text="Ledger-derived accumulated depreciation through the disposition date",
    )
    partial_month_depreciation = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    final_book_value = models.DecimalField(max_digits=14, decimal_places=2)
    gain_loss = models.DecimalField(max_digits=14, decimal_places=2)
    notes = models.TextField(max_length=500, blank=True, default="")

    journal_entry = models.OneToOneField(
        "accounting.JournalEntry",
        on_delete=models.PROTECT,
        related_name="cow_disposition",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-disposition_date"]
        indexes = [
            models.Index(fields=["disposition_date"], name="herd_disp_date_idx"),
            models.Index(fields=["disposition_type"], name="herd_disp_type_idx"),
        ]

    def __str__(self):
        return f"{self.disposition_type} of cow {self.cow_id} on {self.disposition_date}"

    @property
    def is_gain(self) -> bool:
        return self.gain_loss > 0

    def clean(self):
        if self.disposition_type != self.SALE and self.sale_amount and self.sale_amount > 0:
            raise ValidationError(
                {"sale_amount": "Sale amount should be 0 for non-sale dispositions"}
            )

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("CowDisposition records are immutable once created")
        # One-per-cow is enforced by the DB constraint (IntegrityError).
        self.full_clean(validate_unique=False)
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("CowDisposition records cannot be deleted")
