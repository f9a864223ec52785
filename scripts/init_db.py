import sys
from pathlib import Path
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

# Ensure repo root is on sys.path when running as a script (Windows-friendly).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.aimarketer.models import Base
from app.aimarketer.users import ensure_admin


def seed_only(*, database_url: str | None = None) -> bool:
    """
    Create missing tables and seed the admin user in an idempotent way.
    Does NOT overwrite an existing admin user's password.
    Returns True when the admin row was created.
    """
    admin_username = (os.environ.get("ADMIN_USERNAME") or "admin").strip()
    admin_password = os.environ.get("ADMIN_PASSWORD") or "admin123"

    db_url = (database_url or os.environ.get("DATABASE_URL") or "sqlite:///users.db").strip()

    # One engine for schema + seed; no app (and no session store) needed.
    engine = create_engine(db_url, future=True, pool_pre_ping=True)
    try:
        Base.metadata.create_all(bind=engine)
        print("Tables 'users' and 'feedback' created or already exist.")

        sm = sessionmaker(bind=engine, class_=Session, autoflush=False, expire_on_commit=False, future=True)
        with sm.begin() as s:
            created = ensure_admin(s, admin_username, admin_password)
    finally:
        engine.dispose()

    print("Admin user created successfully." if created else "Admin user already exists.")
    print(f"Admin username: {admin_username}")
    print("Admin password: (from ADMIN_PASSWORD)")
    return created


def main() -> None:
    seed_only(database_url=None)


if __name__ == "__main__":
    main()
