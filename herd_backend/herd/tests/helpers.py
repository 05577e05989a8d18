# herd/tests/helpers.py

from datetime import date
from decimal import Decimal

from django.db.models import Sum

from accounting.models.ledger import LedgerEntry
from herd.models import Cow
from herd.services.acquisition import register_cow


def make_cow(
    tag="1001",
    price="2500.00",
    salvage="500.00",
    freshen=date(2023, 1, 15),
    method=Cow.STRAIGHT_LINE,
    acquisition_type=Cow.PURCHASED,
    **extra,
):
    return register_cow(
        tag_number=tag,
        purchase_price=Decimal(price),
        salvage_value=Decimal(salvage) if salvage is not None else None,
        freshen_date=freshen,
        depreciation_method=method,
        acquisition_type=acquisition_type,
        **extra,
    )


def ledger_total(asset_id, account_code, entry_type):
    total = LedgerEntry.objects.filter(
        asset_id=asset_id, account_code=account_code, entry_type=entry_type
    ).aggregate(total=Sum("amount"))["total"]
    return total or Decimal("0.00")
