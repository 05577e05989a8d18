# herd/services/acquisition.py

"""
ACQUISITION SERVICE

Registers a cow and posts its acquisition entry in one transaction:

    purchased:  Dr Dairy Cows / Cr Cash
    raised:     Dr Dairy Cows / Cr Owner's Equity

When no salvage value is given, it defaults to the configured salvage
percentage of the purchase price. A freshen date after `as_of` is rejected;
callers at the API boundary pass today.
"""

from __future__ import annotations

import logging
from datetime import date

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, transaction

from accounting.services.exceptions import LedgerStoreError
from accounting.services.journal_builder import build_acquisition_entry
from accounting.services.money import round_to_cent
from herd.config import DepreciationConfig, get_depreciation_config
from herd.models import Cow
from herd.repositories.ledger import DjangoLedgerRepository, LedgerRepository
from herd.services.depreciation_calculator import validate_depreciation_inputs
from herd.services.exceptions import CowValidationError

logger = logging.getLogger(__name__)


def default_salvage_value(purchase_price, config: DepreciationConfig):
    return round_to_cent(round_to_cent(purchase_price) * config.salvage_percentage / 100)


def register_cow(
    *,
    tag_number: str,
    purchase_price,
    freshen_date: date,
    salvage_value=None,
    depreciation_method: str = Cow.STRAIGHT_LINE,
    acquisition_type: str = Cow.PURCHASED,
    name: str = "",
    birth_date: date | None = None,
    as_of: date | None = None,
    config: DepreciationConfig | None = None,
    repository: LedgerRepository | None = None,
) -> Cow:
    config = config or get_depreciation_config()
    repository = repository or DjangoLedgerRepository()

    tag_number = (tag_number or "").strip()
    if not tag_number:
        raise CowValidationError("Tag number is required", field="tag_number")

    if acquisition_type not in dict(Cow.ACQUISITION_TYPES):
        raise CowValidationError(
            f"Invalid acquisition type: {acquisition_type!r}", field="acquisition_type"
        )

    price = round_to_cent(purchase_price)
    if salvage_value is None:
        salvage = default_salvage_value(price, config)
    else:
        salvage = round_to_cent(salvage_value)

    validate_depreciation_inputs(
        purchase_price=price,
        salvage_value=salvage,
        freshen_date=freshen_date,
        method=depreciation_method,
        as_of=as_of,
    )

    try:
        with transaction.atomic():
            cow = Cow(
                tag_number=tag_number,
                name=(name or "").strip(),
                birth_date=birth_date,
                freshen_date=freshen_date,
                purchase_price=price,
                salvage_value=salvage,
                depreciation_method=depreciation_method,
                acquisition_type=acquisition_type,
                total_depreciation=round_to_cent(0),
                current_value=price,
            )
            cow.full_clean()
            cow.save()

            entry = build_acquisition_entry(
                asset_id=cow.id,
                tag_number=cow.tag_number,
                purchase_price=price,
                acquisition_type=acquisition_type,
                entry_date=freshen_date,
                accounts=config.accounts,
            )
            repository.insert_journal_entry_with_lines(entry)
    except DjangoValidationError as exc:
        errors = getattr(exc, "message_dict", None) or {}
        field = next(iter(errors), None)
        message = "; ".join(f"{k}: {', '.join(v)}" for k, v in errors.items()) or str(exc)
        raise CowValidationError(message, field=field) from exc
    except IntegrityError as exc:
        if Cow.objects.filter(tag_number=tag_number).exists():
            raise CowValidationError(
                f"Tag number {tag_number} is already registered", field="tag_number"
            ) from exc
        raise LedgerStoreError(f"Failed to register cow {tag_number}: {exc}") from exc
    except DatabaseError as exc:
        raise LedgerStoreError(f"Failed to register cow {tag_number}: {exc}") from exc

    logger.info(
        "Registered cow %s (#%s, %s) price=%s salvage=%s",
        cow.id,
        cow.tag_number,
        acquisition_type,
        price,
        salvage,
    )
    return cow
