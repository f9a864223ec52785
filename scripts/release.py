"""
Release-phase helper.

Goal:
- Run alembic migrations against DATABASE_URL.
- Seed the admin user (idempotent; does NOT overwrite existing passwords).

Usage:
  python scripts/release.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def run_release() -> None:
    db_url = (os.environ.get("DATABASE_URL") or "sqlite:///users.db").strip()
    env = (os.environ.get("ENV") or "").strip().lower()

    print("=== AIMarketer release start ===", flush=True)
    print(f"ENV={env or '(unset)'}", flush=True)
    print("Running Alembic migrations...", flush=True)

    from alembic import command
    from alembic.config import Config

    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", db_url)
    command.upgrade(cfg, "head")
    print("Migrations complete.", flush=True)

    print("Seeding admin (idempotent)...", flush=True)
    from scripts import init_db

    init_db.seed_only(database_url=db_url)
    print("Seed complete.", flush=True)
    print("=== AIMarketer release done ===", flush=True)


def main() -> None:
    run_release()


if __name__ == "__main__":
    main()
