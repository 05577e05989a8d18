# herd/apps.py

"""
HERD APP CONFIG

Dairy herd asset register:
- Cow acquisition (purchased / raised)
- Monthly depreciation + catch-up reconciliation
- Disposition (sale / death / cull) with gain/loss posting

Golden Rule:
- Every ledger write goes through herd.services.engine (locks + transactions).
"""

from django.apps import AppConfig


class HerdConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "herd"
    verbose_name = "Dairy Herd"
