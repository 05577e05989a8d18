# herd/models/cow.py

"""
======================================================
PATH: herd/models/cow.py
======================================================
COW (DEPRECIABLE BIOLOGICAL ASSET)

Owns the depreciation inputs: purchase price, salvage value, freshen date
(service start) and method.

total_depreciation / current_value / depreciated_through are a READ CACHE.
They are recomputed from ledger sums by the engine after every successful
ledger write and are never used as an input to a calculation.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinLengthValidator, MinValueValidator
from django.db import models


class Cow(models.Model):
    STRAIGHT_LINE = "straight-line"
    DECLINING_BALANCE = "declining-balance"
    SUM_OF_YEARS = "sum-of-years"

    DEPRECIATION_METHODS = [
        (STRAIGHT_LINE, "Straight line"),
        (DECLINING_BALANCE, "Declining balance (double)"),
        (SUM_OF_YEARS, "Sum of years' digits"),
    ]

    PURCHASED = "purchased"
    RAISED = "raised"

    ACQUISITION_TYPES = [
        (PURCHASED, "Purchased"),
        (RAISED, "Raised"),
    ]

    STATUS_ACTIVE = "active"
    STATUS_DISPOSED = "disposed"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_DISPOSED, "Disposed"),
    ]

    tag_number = models.CharField(
        max_length=50,
        unique=True,
        validators=[MinLengthValidator(1)],
    )
    name = models.CharField(max_length=100, blank=True, default="")
    birth_date = models.DateField(null=True, blank=True)
    freshen_date = models.DateField(help_text="Service start date for depreciation")

    purchase_price = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    salvage_value = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    depreciation_method = models.CharField(
        max_length=20,
        choices=DEPRECIATION_METHODS,
        default=STRAIGHT_LINE,
    )
    acquisition_type = models.CharField(
        max_length=10,
        choices=ACQUISITION_TYPES,
        default=PURCHASED,
    )
    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default=STATUS_ACTIVE,
    )

    # Read cache (ledger-derived)
    total_depreciation = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    current_value = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    depreciated_through = models.DateField(
        null=True,
        blank=True,
        help_text="Last day of the latest month covered by the ledger",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["tag_number"]
        indexes = [
            models.Index(fields=["status"], name="herd_cow_status_idx"),
            models.Index(fields=["freshen_date"], name="herd_cow_freshen_idx"),
            models.Index(
                fields=["status", "depreciated_through"],
                name="herd_cow_status_through_idx",
            ),
        ]

    def __str__(self):
        return f"Cow #{self.tag_number}"

    @property
    def depreciable_amount(self) -> Decimal:
        return self.purchase_price - self.salvage_value

    @property
    def is_disposed(self) -> bool:
        return self.status == self.STATUS_DISPOSED

    def clean(self):
        self.tag_number = (self.tag_number or "").strip()
        if not self.tag_number:
            raise ValidationError({"tag_number": "Tag number is required"})

        if (
            self.purchase_price is not None
            and self.salvage_value is not None
            and self.salvage_value >= self.purchase_price
        ):
            raise ValidationError(
                {"salvage_value": "Salvage value must be less than purchase price"}
            )

        if self.birth_date and self.freshen_date and self.freshen_date < self.birth_date:
            raise ValidationError(
                {"freshen_date": "Freshen date must be on or after birth date"}
            )

    def delete(self, *args, **kwargs):
        from accounting.models.ledger import LedgerEntry

        if LedgerEntry.objects.filter(asset_id=self.pk).exists():
            raise ValidationError("Cows with ledger history cannot be deleted")
        return super().delete(*args, **kwargs)
