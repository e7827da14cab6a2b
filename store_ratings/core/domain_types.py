"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, StoreId, RatingId wrap ints; never pass a bare int where an id is meant
    - RatingValue is bounded MIN_RATING..MAX_RATING (1–5)
    - Roles encoded as an Enum; no raw string matching outside this module
    - Identity is immutable once decoded from a token

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum for Role: serializes to JSON and JWT claims without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
StoreId = NewType("StoreId", int)
RatingId = NewType("RatingId", int)


# ─── Value Types ─────────────────────────────────────────────────

RatingValue = NewType("RatingValue", int)   # 1–5

MIN_RATING: int = 1
MAX_RATING: int = 5


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Account roles — maps to DB `role` column and the token `role` claim."""
    ADMIN = "admin"
    USER = "user"
    OWNER = "owner"


@dataclass(frozen=True)
class Identity:
    """Authenticated (id, role, email) tuple carried by a verified token."""
    id: UserId
    role: Role
    email: str
