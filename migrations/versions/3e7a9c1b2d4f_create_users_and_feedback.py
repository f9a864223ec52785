"""Create users and feedback tables.

Revision ID: 3e7a9c1b2d4f
Revises:
Create Date: 2026-10-18

Tables are skipped when they already exist (databases bootstrapped by
scripts/init_db.py or DB_AUTO_CREATE before migrations were introduced).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = "3e7a9c1b2d4f"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    insp = inspect(op.get_bind())

    if not insp.has_table("users"):
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("username", sa.String(255), nullable=False),
            sa.Column("password_hash", sa.String(255), nullable=False),
            sa.Column("role", sa.String(16), nullable=False, server_default="user"),
            sa.UniqueConstraint("username"),
            sa.CheckConstraint("length(username) > 0", name="ck_users_username_not_empty"),
            sa.CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
        )

    if not insp.has_table("feedback"):
        op.create_table(
            "feedback",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("email", sa.String(320), nullable=False),
            sa.Column("phone", sa.String(64), nullable=False),
            sa.Column("query", sa.Text(), nullable=False),
        )


def downgrade() -> None:
    op.drop_table("feedback")
    op.drop_table("users")
