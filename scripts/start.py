#!/usr/bin/env python3
"""
Production startup for the AIMarketer site.

1. Checks PORT / WEB_CONCURRENCY / DATABASE_URL (via load_settings)
2. Runs migrations + admin seed (release.py)
3. Execs gunicorn on app.wsgi:app

Usage:
    python scripts/start.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.aimarketer.config import Settings, load_settings


def check_settings(settings: Settings) -> None:
    """Raises ValueError for a port out of range or more workers than the store allows."""
    if not 1 <= settings.port <= 65535:
        raise ValueError(f"Invalid PORT value '{settings.port}'. Must be integer 1-65535.")
    if settings.workers < 1:
        raise ValueError(f"Invalid WEB_CONCURRENCY value '{settings.workers}'. Must be at least 1.")
    # SQLite serializes writers on one file lock; concurrent workers turn that into "database is locked".
    if settings.database_url.startswith("sqlite") and settings.workers > 1:
        raise ValueError(
            f"WEB_CONCURRENCY={settings.workers} needs a server database; "
            "the SQLite store supports a single worker."
        )


def gunicorn_argv(settings: Settings) -> list[str]:
    return [
        "gunicorn",
        "app.wsgi:app",
        "--bind", f"0.0.0.0:{settings.port}",
        "--workers", str(settings.workers),
        "--timeout", "60",
        "--preload",
        "--access-logfile", "-",
        "--error-logfile", "-",
    ]


def main() -> None:
    try:
        settings = load_settings()
        check_settings(settings)
    except ValueError as e:
        print(f"ERROR: {e}", flush=True)
        sys.exit(1)

    print(f"PORT={settings.port} WEB_CONCURRENCY={settings.workers} validated", flush=True)

    print("=== Running release phase ===", flush=True)
    from scripts.release import run_release
    try:
        run_release()
    except Exception as e:
        print(f"Release failed: {e}", flush=True)
        sys.exit(1)

    print("=== Starting gunicorn (health check at /healthz) ===", flush=True)
    argv = gunicorn_argv(settings)
    os.execvp(argv[0], argv)


if __name__ == "__main__":
    main()
