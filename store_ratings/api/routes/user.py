"""Customer Routes — store listing and the caller's own ratings.

Invariants:
    - Every route requires Role.USER
    - The acting user is always the token identity; no route takes a user id
    - POST upserts (tolerates absence); PATCH and DELETE demand an existing rating
"""

from fastapi import APIRouter, Depends

from store_ratings.api.dependencies import (
    get_rating_ledger,
    get_store_registry,
    require_roles,
)
from store_ratings.core.domain_types import Identity, Role, StoreId
from store_ratings.schemas.rating import RatingSubmitRequest, RatingUpdateRequest
from store_ratings.services.rating_ledger import RatingLedger
from store_ratings.services.store_registry import StoreRegistry

router = APIRouter(prefix="/api/user", tags=["user"])

require_user = require_roles(Role.USER)


@router.get("/stores")
async def list_stores(
    name: str | None = None,
    address: str | None = None,
    identity: Identity = Depends(require_user),
    stores: StoreRegistry = Depends(get_store_registry),
):
    return await stores.list_for_user(identity.id, name=name, address=address)


@router.post("/ratings")
async def submit_rating(
    body: RatingSubmitRequest,
    identity: Identity = Depends(require_user),
    ledger: RatingLedger = Depends(get_rating_ledger),
):
    rating_id = await ledger.submit(identity.id, StoreId(body.store_id), body.rating)
    return {"message": "Rating submitted successfully", "ratingId": rating_id}


@router.patch("/ratings/{store_id}")
async def update_rating(
    store_id: int,
    body: RatingUpdateRequest,
    identity: Identity = Depends(require_user),
    ledger: RatingLedger = Depends(get_rating_ledger),
):
    await ledger.update(identity.id, StoreId(store_id), body.rating)
    return {"message": "Rating updated successfully"}


@router.delete("/ratings/{store_id}")
async def delete_rating(
    store_id: int,
    identity: Identity = Depends(require_user),
    ledger: RatingLedger = Depends(get_rating_ledger),
):
    await ledger.delete(identity.id, StoreId(store_id))
    return {"message": "Rating deleted successfully"}
