from __future__ import annotations

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class Base(DeclarativeBase):
    pass


class User(Base):
    """
    Credential row. Written once at registration (or by the admin seed), never edited.
    Usernames are case-sensitive and unique; the store rejects duplicates.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("length(username) > 0", name="ck_users_username_not_empty"),
        CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=ROLE_USER, server_default=ROLE_USER)


# Ensure module models are imported so Base.metadata includes their tables.
# (Kept at bottom to avoid circular imports.)
from app.aimarketer.modules.feedback.models import Feedback  # noqa: E402,F401
