"""Initial schema — users, stores, ratings.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

ratings carries the (user_id, store_id) unique constraint the ledger upsert
targets, plus ON DELETE CASCADE to both parents.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(60), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("address", sa.String(400), nullable=False, server_default=""),
        sa.Column("role", sa.String(10), nullable=False, server_default="user"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint(
            "role IN ('admin', 'user', 'owner')", name="ck_users_role",
        ),
    )

    op.create_table(
        "stores",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(60), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("address", sa.String(400), nullable=False, server_default=""),
        sa.Column(
            "owner_id", sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True,
        ),
        sa.UniqueConstraint("email", name="uq_stores_email"),
    )
    op.create_index("ix_stores_name", "stores", ["name"])
    op.create_index("ix_stores_owner_id", "stores", ["owner_id"])

    op.create_table(
        "ratings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "user_id", sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "store_id", sa.Integer,
            sa.ForeignKey("stores.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("value", sa.Integer, nullable=False),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True),
            nullable=False, server_default=sa.func.now(),
        ),
        sa.UniqueConstraint("user_id", "store_id", name="uq_ratings_user_store"),
        sa.CheckConstraint("value >= 1 AND value <= 5", name="ck_ratings_value"),
    )
    op.create_index("ix_ratings_store_id", "ratings", ["store_id"])


def downgrade() -> None:
    op.drop_index("ix_ratings_store_id", table_name="ratings")
    op.drop_table("ratings")
    op.drop_index("ix_stores_owner_id", table_name="stores")
    op.drop_index("ix_stores_name", table_name="stores")
    op.drop_table("stores")
    op.drop_table("users")
