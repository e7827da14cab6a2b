"""Aggregation Reader — live rating statistics for stores and owners.

Invariants:
    - Every call recomputes COUNT/SUM from the current ledger rows; nothing cached
    - Zero ratings → {mean: 0.0, count: 0}
    - Rounding delegated to core.aggregate.build_aggregate (pure)
    - aggregate_for_owner raises NotFound when the owner has no store

Design Decisions:
    - SUM + COUNT in SQL, division in Python: exact half-up rounding regardless of
      the backend's AVG precision
    - Owner's store = lowest id among stores they own (one-per-owner is implied)
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from store_ratings.core.aggregate import RatingAggregate, build_aggregate
from store_ratings.core.domain_types import StoreId, UserId
from store_ratings.core.errors import ResourceNotFoundError
from store_ratings.core.repository_protocols import RatingListing
from store_ratings.models.rating import Rating
from store_ratings.models.store import Store
from store_ratings.models.user import User

logger = logging.getLogger(__name__)


class AggregationReader:
    """Computes (mean, count) on demand from the rating ledger."""

    def __init__(self, db: AsyncSession, ledger: RatingListing):
        self.db = db
        self.ledger = ledger

    async def aggregate(self, store_id: StoreId) -> RatingAggregate:
        result = await self.db.execute(
            select(
                func.count(Rating.id),
                func.coalesce(func.sum(Rating.value), 0),
            ).where(Rating.store_id == store_id)
        )
        count, total = result.one()
        return build_aggregate(int(total), int(count))

    async def find_owner_store(self, owner_id: UserId) -> Store | None:
        result = await self.db.execute(
            select(Store)
            .where(Store.owner_id == owner_id)
            .order_by(Store.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def aggregate_for_owner(
        self, owner_id: UserId,
    ) -> tuple[Store, RatingAggregate]:
        store = await self.find_owner_store(owner_id)
        if store is None:
            raise ResourceNotFoundError("Store for owner", str(owner_id))
        return store, await self.aggregate(StoreId(store.id))

    async def owner_dashboard(self, owner_id: UserId) -> dict:
        """Store, live aggregate and raters (newest first) for an owner."""
        store, aggregate = await self.aggregate_for_owner(owner_id)
        raters = await self.ledger.list_for_store(StoreId(store.id))
        return {
            "store": {
                "id": store.id,
                "name": store.name,
                "email": store.email,
                "address": store.address,
            },
            "avgRating": aggregate.mean,
            "totalRatings": aggregate.count,
            "raters": [
                {
                    "id": user.id,
                    "name": user.name,
                    "email": user.email,
                    "rating": rating.value,
                    "updated_at": rating.updated_at.isoformat(),
                }
                for user, rating in raters
            ],
        }

    async def platform_totals(self) -> dict:
        """Row counts for the admin dashboard."""
        users = await self.db.scalar(select(func.count(User.id)))
        stores = await self.db.scalar(select(func.count(Store.id)))
        ratings = await self.db.scalar(select(func.count(Rating.id)))
        return {
            "usersCount": users or 0,
            "storesCount": stores or 0,
            "ratingsCount": ratings or 0,
        }
