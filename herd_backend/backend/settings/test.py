# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS
- In-memory SQLite (fast, isolated)
- Batch catch-up runs inline (threads cannot share an in-memory test DB)
- Throttling off so API tests are deterministic
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import DEPRECIATION, REST_FRAMEWORK

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

DEPRECIATION = {
    **DEPRECIATION,
    "DEFAULT_YEARS": 5,
    "SALVAGE_PERCENTAGE": "10",
    "FISCAL_YEAR_START_MONTH": 1,
    "CLAMP_FINAL_BOOK_VALUE": True,
    "BATCH_WORKERS": 1,
    "ACCOUNT_CODES": {},
}

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_CLASSES": (),
}
