"""User ORM — persists account identity, salted password hash and role.

Invariants:
    - email is unique via the named uq_users_email constraint (its index serves lookups),
      translated to DuplicateEmailError
    - role ∈ {admin, user, owner} (CHECK constraint mirrors core.domain_types.Role)
    - password_hash is a bcrypt digest, never plaintext

Design Decisions:
    - Integer autoincrement ids: token `id` claim is an integer
    - address stored as empty string when absent (matches existing clients)
"""

from sqlalchemy import CheckConstraint, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from store_ratings.db.base import Base


class User(Base):
    """Account — admin, store owner or customer."""
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        CheckConstraint(
            "role IN ('admin', 'user', 'owner')", name="ck_users_role",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(60), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(400), nullable=False, default="")
    role: Mapped[str] = mapped_column(String(10), nullable=False, default="user")

    def to_public(self) -> dict:
        """Serializable view — never includes password_hash."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "address": self.address,
            "role": self.role,
        }
