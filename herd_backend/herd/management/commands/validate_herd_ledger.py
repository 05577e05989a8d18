# herd/management/commands/validate_herd_ledger.py

from __future__ import annotations

from django.core.management.base import BaseCommand

from herd.services.integrity import CHECKS, run_integrity_checks


class Command(BaseCommand):
    help = "Validate herd ledger integrity (entry balance, cache drift, post-disposition lines, over-depreciation)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Fail (non-zero exit) if any issue is found.",
        )
        parser.add_argument(
            "--limit",
            type=int,
            default=10,
            help="Max issues printed per check (default 10).",
        )

    def handle(self, *args, **options):
        strict = bool(options.get("strict"))
        limit = max(1, int(options.get("limit") or 10))

        report = run_integrity_checks()

        self.stdout.write(self.style.MIGRATE_HEADING("Herd ledger validation"))
        self.stdout.write(f"Journal entries checked: {report.entries_checked}")
        self.stdout.write(f"Cows checked:            {report.cows_checked}")
        self.stdout.write("")

        for check in CHECKS:
            issues = report.by_check(check)
            if not issues:
                self.stdout.write(self.style.SUCCESS(f"[OK] {check}"))
                continue

            self.stderr.write(self.style.ERROR(f"[FAIL] {check}: {len(issues)} issue(s)"))
            for issue in issues[:limit]:
                where = []
                if issue.asset_id is not None:
                    where.append(f"cow_id={issue.asset_id}")
                if issue.journal_entry_id is not None:
                    where.append(f"journal_entry_id={issue.journal_entry_id}")
                self.stderr.write(f"  {' '.join(where)} {issue.message}")

        self.stdout.write("")
        if report.ok:
            self.stdout.write(self.style.SUCCESS("VALIDATION PASSED"))
        else:
            self.stderr.write(self.style.ERROR(f"VALIDATION FOUND ISSUES: {len(report.issues)} problem(s)"))

        return self._exit(strict and not report.ok)

    def _exit(self, fail: bool):
        if fail:
            raise SystemExit(1)
        return None
