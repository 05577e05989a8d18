# herd/services/batch.py

"""
======================================================
PATH: herd/services/batch.py
======================================================
BATCH CATCH-UP (SCHEDULED JOB)

Runs reconcile_asset() for many cows, optionally on a thread pool.

Restartable:
- cows whose cached depreciated_through already covers the target month
  are skipped, as are cows already depreciated down to salvage
  (unless force=True)
- everything else goes through the idempotent reconciler, so a run that
  died halfway simply picks up where it stopped

Per-cow failures from the engine are collected and reported; they do not
stop the batch. Unexpected exceptions propagate.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date

from django.db import close_old_connections
from django.db.models import F, Q

from accounting.services.exceptions import AccountingServiceError
from herd.config import DepreciationConfig, get_depreciation_config
from herd.models import Cow
from herd.services.engine import ReconcileResult, reconcile_asset
from herd.services.schedule import last_full_period

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    as_of: date
    processed: int = 0
    skipped: int = 0
    periods_created: int = 0
    entries_created: int = 0
    failures: list[tuple[int, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def select_cows_needing_catchup(
    *, as_of: date, cow_ids=None, force: bool = False
):
    target = last_full_period(as_of=as_of).last_day

    qs = Cow.objects.filter(freshen_date__lte=target)
    if cow_ids:
        qs = qs.filter(pk__in=list(cow_ids))
    if not force:
        qs = (
            qs.filter(status=Cow.STATUS_ACTIVE)
            .filter(Q(depreciated_through__isnull=True) | Q(depreciated_through__lt=target))
            .exclude(total_depreciation__gte=F("purchase_price") - F("salvage_value"))
        )
    return qs.order_by("id")


def _reconcile_one(cow_id: int, as_of: date, config: DepreciationConfig, threaded: bool):
    if threaded:
        close_old_connections()
    try:
        return reconcile_asset(cow_id, as_of, config=config)
    finally:
        if threaded:
            close_old_connections()


def run_catchup_batch(
    *,
    as_of: date,
    cow_ids=None,
    workers: int | None = None,
    force: bool = False,
    config: DepreciationConfig | None = None,
) -> BatchResult:
    config = config or get_depreciation_config()
    workers = max(1, int(workers or config.batch_workers))

    selected = list(
        select_cows_needing_catchup(as_of=as_of, cow_ids=cow_ids, force=force)
        .values_list("id", flat=True)
    )
    candidates = Cow.objects.filter(pk__in=list(cow_ids)) if cow_ids else Cow.objects.all()
    result = BatchResult(as_of=as_of, skipped=candidates.count() - len(selected))

    logger.info(
        "Catch-up batch as of %s: %d cow(s) selected, %d skipped, workers=%d",
        as_of,
        len(selected),
        result.skipped,
        workers,
    )

    def record(cow_id: int, outcome: ReconcileResult | None, error: Exception | None):
        if error is not None:
            result.failures.append((cow_id, str(error)))
            logger.error("Cow %s: catch-up failed: %s", cow_id, error)
            return
        result.processed += 1
        result.periods_created += outcome.periods_created
        result.entries_created += outcome.entries_created

    if workers == 1:
        for cow_id in selected:
            try:
                record(cow_id, _reconcile_one(cow_id, as_of, config, False), None)
            except AccountingServiceError as exc:
                record(cow_id, None, exc)
        return result

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="catchup") as pool:
        futures = {
            pool.submit(_reconcile_one, cow_id, as_of, config, True): cow_id
            for cow_id in selected
        }
        for future, cow_id in futures.items():
            try:
                record(cow_id, future.result(), None)
            except AccountingServiceError as exc:
                record(cow_id, None, exc)

    return result
