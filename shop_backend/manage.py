#!/usr/bin/env python
"""
Storefront management commands.

Settings selection, when DJANGO_SETTINGS_MODULE is not a concrete module:
- `manage.py test ...`  -> backend.settings.test (in-memory SQLite, LocMem cache)
- everything else      -> backend.settings.dev

The bare package "backend.settings" loads no apps, so it is treated as unset.
Deployments pin backend.settings.prod in the environment.
"""

from __future__ import annotations

import os
import sys

SETTINGS_PACKAGE = "backend.settings"


def _default_settings_for(argv) -> str:
    command = argv[1] if len(argv) > 1 else ""
    if command == "test":
        return f"{SETTINGS_PACKAGE}.test"
    return f"{SETTINGS_PACKAGE}.dev"


def _ensure_settings_module(argv) -> None:
    current = (os.environ.get("DJANGO_SETTINGS_MODULE") or "").strip()
    if current in ("", SETTINGS_PACKAGE):
        os.environ["DJANGO_SETTINGS_MODULE"] = _default_settings_for(argv)


def main() -> None:
    _ensure_settings_module(sys.argv)

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Django is not importable. Install the project first: pip install -e ."
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
