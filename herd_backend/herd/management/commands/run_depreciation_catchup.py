# herd/management/commands/run_depreciation_catchup.py

from __future__ import annotations

from datetime import datetime

from django.core.management.base import BaseCommand
from django.utils import timezone

from herd.services.batch import run_catchup_batch, select_cows_needing_catchup


def _parse_date(s: str | None):
    """
    Parse YYYY-MM-DD into a date, or None.
    """
    if not s:
        return None
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        return None


class Command(BaseCommand):
    help = (
        "Post missing monthly depreciation for every active cow through the last "
        "full month before --as-of. Safe to re-run: finished cows are skipped."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--as-of",
            dest="as_of",
            help="Reconcile as of YYYY-MM-DD (default: today)",
        )
        parser.add_argument(
            "--cow",
            dest="cow_ids",
            type=int,
            action="append",
            help="Limit to a cow id (repeatable)",
        )
        parser.add_argument(
            "--workers",
            type=int,
            default=None,
            help="Thread pool size (default: DEPRECIATION_BATCH_WORKERS)",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Reconcile every selected cow, even those already up to date.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="List the cows that would be reconciled without writing to DB",
        )

    def handle(self, *args, **options):
        as_of = _parse_date(options.get("as_of"))
        if options.get("as_of") and not as_of:
            self.stderr.write(self.style.ERROR("Invalid --as-of date. Use YYYY-MM-DD"))
            raise SystemExit(1)
        as_of = as_of or timezone.localdate()

        workers = options.get("workers")
        if workers is not None and workers < 1:
            self.stderr.write(self.style.ERROR("--workers must be >= 1"))
            raise SystemExit(1)

        cow_ids = options.get("cow_ids") or None
        force = bool(options.get("force"))

        self.stdout.write(self.style.MIGRATE_HEADING("Depreciation catch-up"))
        self.stdout.write(f"As of: {as_of.isoformat()}")

        if options.get("dry_run"):
            selected = select_cows_needing_catchup(as_of=as_of, cow_ids=cow_ids, force=force)
            for cow in selected:
                through = cow.depreciated_through.isoformat() if cow.depreciated_through else "-"
                self.stdout.write(f"  would reconcile cow={cow.id} tag={cow.tag_number} through={through}")
            self.stdout.write(self.style.WARNING(f"DRY RUN: {selected.count()} cow(s) selected"))
            return

        result = run_catchup_batch(
            as_of=as_of,
            cow_ids=cow_ids,
            workers=workers,
            force=force,
        )

        self.stdout.write(f"Processed: {result.processed}")
        self.stdout.write(f"Skipped (up to date): {result.skipped}")
        self.stdout.write(f"Periods created: {result.periods_created}")
        self.stdout.write(f"Entries created: {result.entries_created}")

        if result.failures:
            self.stderr.write(self.style.ERROR(f"[FAIL] {len(result.failures)} cow(s) failed"))
            for cow_id, message in result.failures[:20]:
                self.stderr.write(f"  cow_id={cow_id} {message}")
            raise SystemExit(1)

        self.stdout.write(self.style.SUCCESS("[OK] Catch-up complete"))
