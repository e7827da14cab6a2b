"""Store ORM — a rateable store, optionally linked to an owner account.

Invariants:
    - email is unique (named uq_stores_email constraint)
    - owner_id is a weak reference to users.id; removing the owner cascades

Design Decisions:
    - One-store-per-owner is implied by the dashboard but not enforced here;
      the dashboard reads the lowest-id store for an owner
"""

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from store_ratings.db.base import Base


class Store(Base):
    """Store entity — target of ratings."""
    __tablename__ = "stores"
    __table_args__ = (
        UniqueConstraint("email", name="uq_stores_email"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(60), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(400), nullable=False, default="")
    owner_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True,
        index=True,
    )

    def to_public(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "address": self.address,
            "owner_id": self.owner_id,
        }
