"""Rating Ledger — the authoritative set of (user, store) ratings.

Invariants:
    - At most one Rating per (user_id, store_id): enforced by the uq_ratings_user_store
      constraint and written through native INSERT ... ON CONFLICT DO UPDATE
    - submit tolerates absence (creates), update demands presence (never creates)
    - update/delete are single conditional statements; zero affected rows → NotFound
    - Each write commits on its own: a rating either fully changes or not at all
    - list_for_store is newest first by updated_at, ties broken by id

Design Decisions:
    - Dialect upsert over SELECT-then-INSERT: concurrent submits for one pair
      cannot both insert; last committed writer's value wins
    - Overwrite keeps the row id; only value and updated_at change
    - Rating value validated here as well as in request schemas: the ledger is
      also called from code paths without a Pydantic boundary
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from store_ratings.core.domain_types import RatingId, StoreId, UserId
from store_ratings.core.errors import DatabaseError, ResourceNotFoundError
from store_ratings.core.validate_credentials import validate_rating_value
from store_ratings.models.rating import Rating, RATING_UNIQUE_COLUMNS
from store_ratings.models.store import Store
from store_ratings.models.user import User

logger = logging.getLogger(__name__)

# Dialects with native ON CONFLICT upsert
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class RatingLedger:
    """Upsert, update, delete and list ratings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit(
        self, user_id: UserId, store_id: StoreId, value: int,
    ) -> RatingId:
        """Insert or overwrite the caller's rating for a store."""
        validate_rating_value(value)
        await self._require_exists(Store, "Store", store_id)
        await self._require_exists(User, "User", user_id)

        now = datetime.now(timezone.utc)
        stmt = self._insert()(Rating).values(
            user_id=user_id, store_id=store_id, value=value, updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=list(RATING_UNIQUE_COLUMNS),
            set_={
                "value": stmt.excluded.value,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(Rating.id)

        try:
            result = await self.db.execute(stmt)
            rating_id = result.scalar_one()
            await self.db.commit()
        except IntegrityError as e:
            # FK failure: store or user removed between the check and the write
            await self.db.rollback()
            logger.warning(f"Rating upsert lost its parent row: {e}")
            raise ResourceNotFoundError("Store", str(store_id))

        logger.info(
            "Rating submitted",
            extra={"user_id": user_id, "store_id": store_id, "rating_id": rating_id},
        )
        return RatingId(rating_id)

    async def update(
        self, user_id: UserId, store_id: StoreId, value: int,
    ) -> None:
        """Overwrite an existing rating; NotFound if the pair has none."""
        validate_rating_value(value)
        result = await self.db.execute(
            update(Rating)
            .where(Rating.user_id == user_id)
            .where(Rating.store_id == store_id)
            .values(value=value, updated_at=datetime.now(timezone.utc))
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise ResourceNotFoundError("Rating", f"store {store_id}")
        await self.db.commit()
        logger.info(
            "Rating updated", extra={"user_id": user_id, "store_id": store_id},
        )

    async def delete(self, user_id: UserId, store_id: StoreId) -> None:
        """Remove the caller's rating; NotFound if the pair has none."""
        result = await self.db.execute(
            delete(Rating)
            .where(Rating.user_id == user_id)
            .where(Rating.store_id == store_id)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            raise ResourceNotFoundError("Rating", f"store {store_id}")
        await self.db.commit()
        logger.info(
            "Rating deleted", extra={"user_id": user_id, "store_id": store_id},
        )

    async def find(self, user_id: UserId, store_id: StoreId) -> Rating | None:
        result = await self.db.execute(
            select(Rating)
            .where(Rating.user_id == user_id)
            .where(Rating.store_id == store_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_for_store(self, store_id: StoreId) -> list[tuple[User, Rating]]:
        """(User, Rating) pairs for a store, newest first."""
        result = await self.db.execute(
            select(User, Rating)
            .join(Rating, Rating.user_id == User.id)
            .where(Rating.store_id == store_id)
            .order_by(Rating.updated_at.desc(), Rating.id.desc())
            .execution_options(populate_existing=True)
        )
        return [(user, rating) for user, rating in result.all()]

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise DatabaseError(f"no native upsert for dialect '{dialect}'", "upsert")
        return insert

    async def _require_exists(self, model, label: str, entity_id: int) -> None:
        found = await self.db.scalar(select(model.id).where(model.id == entity_id))
        if found is None:
            raise ResourceNotFoundError(label, str(entity_id))
