"""Store Registry — admin store creation and customer-facing store listing.

Invariants:
    - name/email/address validated with the same policies as users
    - owner_id, when given, must reference an existing account with role owner
    - Duplicate store email → DuplicateEmailError("Store") via the unique constraint
    - Listing statistics come from live ledger rows (same rounding as the reader)

Design Decisions:
    - Listing joins a grouped SUM/COUNT subquery plus the caller's own rating,
      one round-trip for the whole page
    - name/address filters are case-insensitive substring matches; % and _ in
      the filter match literally
"""

import logging

from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from store_ratings.core.aggregate import build_aggregate
from store_ratings.core.domain_types import Role, StoreId, UserId
from store_ratings.core.errors import (
    DatabaseError,
    DuplicateEmailError,
    InvalidInputError,
)
from store_ratings.core.validate_credentials import (
    validate_address,
    validate_email,
    validate_name,
)
from store_ratings.models.rating import Rating
from store_ratings.models.store import Store
from store_ratings.models.user import User
from store_ratings.services.credential_store import is_unique_email_violation

logger = logging.getLogger(__name__)


class StoreRegistry:
    """Store persistence and read models."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        name: str,
        email: str,
        address: str | None,
        owner_id: UserId | None = None,
    ) -> StoreId:
        store = Store(
            name=validate_name(name, label="Store name"),
            email=validate_email(email),
            address=validate_address(address),
            owner_id=await self._validated_owner(owner_id),
        )
        self.db.add(store)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if is_unique_email_violation(e):
                raise DuplicateEmailError("Store")
            logger.error(f"Store insert failed: {e}")
            raise DatabaseError("Integrity constraint violated", "insert")
        logger.info("Store created", extra={"store_id": store.id})
        return StoreId(store.id)

    async def find_by_id(self, store_id: StoreId) -> Store | None:
        return await self.db.get(Store, store_id)

    async def list_for_user(
        self,
        user_id: UserId,
        name: str | None = None,
        address: str | None = None,
    ) -> list[dict]:
        """Stores with live average, rating count and the caller's own rating."""
        stats = (
            select(
                Rating.store_id,
                func.count(Rating.id).label("rating_count"),
                func.sum(Rating.value).label("rating_total"),
            )
            .group_by(Rating.store_id)
            .subquery()
        )
        own = aliased(Rating)
        query = (
            select(Store, stats.c.rating_count, stats.c.rating_total, own.value)
            .outerjoin(stats, stats.c.store_id == Store.id)
            .outerjoin(
                own, and_(own.store_id == Store.id, own.user_id == user_id),
            )
            .order_by(Store.name, Store.id)
        )
        if name:
            query = query.where(Store.name.icontains(name, autoescape=True))
        if address:
            query = query.where(Store.address.icontains(address, autoescape=True))

        result = await self.db.execute(query)
        stores = []
        for store, count, total, own_value in result.all():
            aggregate = build_aggregate(int(total or 0), int(count or 0))
            stores.append({
                **store.to_public(),
                "avgRating": aggregate.mean,
                "ratingCount": aggregate.count,
                "userRating": own_value,
            })
        return stores

    async def _validated_owner(self, owner_id: UserId | None) -> int | None:
        if owner_id is None:
            return None
        owner = await self.db.get(User, owner_id)
        if owner is None or owner.role != Role.OWNER.value:
            raise InvalidInputError(
                "owner_id must reference a store owner account", "owner_id",
            )
        return owner.id
