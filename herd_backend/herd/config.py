# herd/config.py

"""
======================================================
PATH: herd/config.py
======================================================
DEPRECIATION CONFIGURATION

Immutable, validated view of settings.DEPRECIATION (populated from the
environment by django-environ in backend/settings/base.py).

Services take an optional `config=` argument; when omitted they use
get_depreciation_config(), which is cached for the life of the process.
Tests that override settings must call get_depreciation_config.cache_clear().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from accounting.services.account_codes import AccountCodes

MAX_SALVAGE_PERCENTAGE = Decimal("50")


@dataclass(frozen=True)
class DepreciationConfig:
    default_years: int = 5
    salvage_percentage: Decimal = Decimal("10")
    fiscal_year_start_month: int = 1
    # Floor the disposition book value at salvage (see DESIGN.md).
    clamp_final_book_value: bool = True
    batch_workers: int = 4
    accounts: AccountCodes = field(default_factory=AccountCodes)

    def __post_init__(self):
        if int(self.default_years) < 1:
            raise ImproperlyConfigured("DEPRECIATION DEFAULT_YEARS must be >= 1")

        if not (Decimal("0") <= self.salvage_percentage <= MAX_SALVAGE_PERCENTAGE):
            raise ImproperlyConfigured(
                "DEPRECIATION SALVAGE_PERCENTAGE must be between 0 and 50"
            )

        if not (1 <= int(self.fiscal_year_start_month) <= 12):
            raise ImproperlyConfigured(
                "FISCAL_YEAR_START_MONTH must be between 1 and 12"
            )

        if int(self.batch_workers) < 1:
            raise ImproperlyConfigured("DEPRECIATION BATCH_WORKERS must be >= 1")


def build_config(raw: dict | None) -> DepreciationConfig:
    raw = raw or {}
    defaults = DepreciationConfig()

    try:
        salvage_percentage = Decimal(
            str(raw.get("SALVAGE_PERCENTAGE", defaults.salvage_percentage))
        )
    except InvalidOperation as exc:
        raise ImproperlyConfigured(
            f"Invalid SALVAGE_PERCENTAGE: {raw.get('SALVAGE_PERCENTAGE')!r}"
        ) from exc

    try:
        accounts = AccountCodes.from_overrides(raw.get("ACCOUNT_CODES"))
    except ValueError as exc:
        raise ImproperlyConfigured(str(exc)) from exc

    return DepreciationConfig(
        default_years=int(raw.get("DEFAULT_YEARS", defaults.default_years)),
        salvage_percentage=salvage_percentage,
        fiscal_year_start_month=int(
            raw.get("FISCAL_YEAR_START_MONTH", defaults.fiscal_year_start_month)
        ),
        clamp_final_book_value=bool(
            raw.get("CLAMP_FINAL_BOOK_VALUE", defaults.clamp_final_book_value)
        ),
        batch_workers=int(raw.get("BATCH_WORKERS", defaults.batch_workers)),
        accounts=accounts,
    )


@lru_cache(maxsize=1)
def get_depreciation_config() -> DepreciationConfig:
    return build_config(getattr(settings, "DEPRECIATION", None))
