#!/usr/bin/env python
"""
PATH: manage.py

Django management entrypoint for the herd backend.

Settings resolution:
- explicit DJANGO_SETTINGS_MODULE wins (production sets backend.settings.prod)
- `manage.py test` with nothing set uses backend.settings.test (in-memory SQLite)
- otherwise backend.settings.dev

"backend.settings" alone is a package that loads nothing, so it is treated
as unset.
"""

from __future__ import annotations

import os
import sys


def _ensure_settings_module(argv: list[str]) -> None:
    current = (os.environ.get("DJANGO_SETTINGS_MODULE") or "").strip()
    if current and current != "backend.settings":
        return

    if len(argv) > 1 and argv[1] == "test":
        os.environ["DJANGO_SETTINGS_MODULE"] = "backend.settings.test"
    else:
        os.environ["DJANGO_SETTINGS_MODULE"] = "backend.settings.dev"


def main() -> None:
    _ensure_settings_module(sys.argv)

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Is it installed and available on your "
            "PYTHONPATH? Did you forget to activate a virtual environment?"
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
