"""Admin Routes — platform totals, user provisioning and store creation.

Invariants:
    - Every route requires Role.ADMIN
    - Provisioned users may have any role; validation identical to signup
    - User detail for an owner embeds their store and its live average
"""

from fastapi import APIRouter, Depends, status

from store_ratings.api.dependencies import (
    get_aggregation_reader,
    get_credential_store,
    get_store_registry,
    require_roles,
)
from store_ratings.core.domain_types import Role, UserId
from store_ratings.core.errors import ResourceNotFoundError
from store_ratings.schemas.admin import CreateStoreRequest, CreateUserRequest
from store_ratings.services.aggregation_reader import AggregationReader
from store_ratings.services.credential_store import CredentialStore
from store_ratings.services.store_registry import StoreRegistry

router = APIRouter(
    prefix="/api/admin", tags=["admin"],
    dependencies=[Depends(require_roles(Role.ADMIN))],
)


@router.get("/dashboard")
async def admin_dashboard(
    reader: AggregationReader = Depends(get_aggregation_reader),
):
    return await reader.platform_totals()


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: CreateUserRequest,
    credentials: CredentialStore = Depends(get_credential_store),
):
    user_id = await credentials.create(
        name=body.name,
        email=body.email,
        password=body.password,
        address=body.address,
        role=body.role,
    )
    return {"message": "User created successfully", "userId": user_id}


@router.get("/users/{user_id}")
async def get_user(
    user_id: int,
    credentials: CredentialStore = Depends(get_credential_store),
    reader: AggregationReader = Depends(get_aggregation_reader),
):
    user = await credentials.find_by_id(UserId(user_id))
    if user is None:
        raise ResourceNotFoundError("User", str(user_id))
    detail = user.to_public()
    if user.role == Role.OWNER.value:
        store = await reader.find_owner_store(UserId(user.id))
        if store is None:
            detail["store"] = None
        else:
            aggregate = await reader.aggregate(store.id)
            detail["store"] = {**store.to_public(), "avgRating": aggregate.mean}
    return detail


@router.post("/stores", status_code=status.HTTP_201_CREATED)
async def create_store(
    body: CreateStoreRequest,
    stores: StoreRegistry = Depends(get_store_registry),
):
    store_id = await stores.create(
        name=body.name,
        email=body.email,
        address=body.address,
        owner_id=UserId(body.owner_id) if body.owner_id is not None else None,
    )
    return {"message": "Store created successfully", "storeId": store_id}
