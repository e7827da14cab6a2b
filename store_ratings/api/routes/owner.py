"""Owner Routes — dashboard for the caller's store."""

from fastapi import APIRouter, Depends

from store_ratings.api.dependencies import get_aggregation_reader, require_roles
from store_ratings.core.domain_types import Identity, Role
from store_ratings.services.aggregation_reader import AggregationReader

router = APIRouter(prefix="/api/owner", tags=["owner"])


@router.get("/dashboard")
async def owner_dashboard(
    identity: Identity = Depends(require_roles(Role.OWNER)),
    reader: AggregationReader = Depends(get_aggregation_reader),
):
    """Store details, live average, total and raters (newest first). 404 without a store."""
    return await reader.owner_dashboard(identity.id)
