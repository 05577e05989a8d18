# PATH: accounting/services/account_codes.py

"""
PATH: accounting/services/account_codes.py

ACCOUNT CODE TABLE (AUTHORITATIVE)

This module answers ONE question:
"Which account code should be used for this purpose?"

The herd ledger posts to a small fixed chart. Codes are configurable per
deployment (settings.DEPRECIATION["ACCOUNT_CODES"]), keyed by semantic name:

    dairy_cows                 1500    asset
    accumulated_depreciation   1500.1  contra-asset
    cash                       1000
    owner_equity               3000    credit side for raised (home-bred) cows
    depreciation_expense       6100
    gain_on_sale               8000
    loss_on_death              9001
    loss_on_sale               9002
    loss_on_cull               9003

Design goals:
- deterministic
- hard-fail on unknown semantic keys (so we don't post to wrong accounts)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace

logger = logging.getLogger(__name__)

ACCOUNT_NAMES = {
    "dairy_cows": "Dairy Cows",
    "accumulated_depreciation": "Accumulated Depreciation - Dairy Cows",
    "cash": "Cash",
    "owner_equity": "Owner's Equity",
    "depreciation_expense": "Depreciation Expense",
    "gain_on_sale": "Gain on Sale of Cows",
    "loss_on_death": "Loss on Dead Cows",
    "loss_on_sale": "Loss on Sale of Cows",
    "loss_on_cull": "Loss on Culled Cows",
}


@dataclass(frozen=True)
class AccountCodes:
    dairy_cows: str = "1500"
    accumulated_depreciation: str = "1500.1"
    cash: str = "1000"
    owner_equity: str = "3000"
    depreciation_expense: str = "6100"
    gain_on_sale: str = "8000"
    loss_on_death: str = "9001"
    loss_on_sale: str = "9002"
    loss_on_cull: str = "9003"

    @classmethod
    def from_overrides(cls, overrides: dict | None) -> "AccountCodes":
        codes = cls()
        if not overrides:
            return codes

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(
                f"Unknown account code keys: {', '.join(unknown)}. "
                f"Expected one of: {', '.join(sorted(known))}"
            )

        cleaned = {k: str(v).strip() for k, v in overrides.items()}
        blank = sorted(k for k, v in cleaned.items() if not v)
        if blank:
            raise ValueError(f"Account codes cannot be blank: {', '.join(blank)}")

        logger.info("Account code overrides applied: %s", cleaned)
        return replace(codes, **cleaned)

    def loss_account_for(self, disposition_type: str) -> str:
        mapping = {
            "sale": self.loss_on_sale,
            "death": self.loss_on_death,
            "culled": self.loss_on_cull,
        }
        try:
            return mapping[disposition_type]
        except KeyError as exc:
            raise ValueError(f"Unknown disposition type: {disposition_type!r}") from exc

    def name_for(self, code: str) -> str:
        for f in fields(self):
            if getattr(self, f.name) == code:
                return ACCOUNT_NAMES[f.name]
        return ""
