"""ORM Models — SQLAlchemy declarative models for users, stores and ratings.

Invariants:
    - All models inherit from Base (db/base.py)
    - Rating rows are unique per (user_id, store_id) at the storage layer

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or Alembic autogenerate runs
"""

from store_ratings.models.user import User  # noqa: F401
from store_ratings.models.store import Store  # noqa: F401
from store_ratings.models.rating import Rating  # noqa: F401
