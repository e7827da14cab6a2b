"""Rating ORM — the ledger row: one user's score for one store.

Invariants:
    - (user_id, store_id) UNIQUE: the storage layer, not application code,
      guarantees at most one row per pair
    - value between 1 and 5 (CHECK constraint)
    - updated_at refreshed on every write (insert, upsert overwrite, update)
    - Lifetime bounded by both user and store (ON DELETE CASCADE on both FKs)

Design Decisions:
    - Named unique constraint: the upsert targets its columns in ON CONFLICT
    - updated_at set from Python (not server default): microsecond precision on
      SQLite keeps newest-first ordering stable
"""

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Integer, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from store_ratings.db.base import Base

RATING_UNIQUE_COLUMNS = ("user_id", "store_id")


class Rating(Base):
    """Rating entity — unique per (user, store)."""
    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint(*RATING_UNIQUE_COLUMNS, name="uq_ratings_user_store"),
        CheckConstraint("value >= 1 AND value <= 5", name="ck_ratings_value"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    store_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("stores.id", ondelete="CASCADE"), nullable=False,
        index=True,
    )
    value: Mapped[int] = mapped_column(Integer, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
