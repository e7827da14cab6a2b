"""Health & Readiness Probes — process liveness and ledger readiness.

Invariants:
    - GET /api/health/ answers 200 while the process runs; it never touches storage
    - GET /api/health/ready answers 200 only when the users, stores and ratings
      tables can be counted; otherwise 503 with the failing stage

Design Decisions:
    - Readiness counts rows through AggregationReader.platform_totals: a database
      that accepts connections but lacks the migrated schema is reported not ready
    - db_manager read from the module at request time (it is set by the lifespan)
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import store_ratings.infrastructure.database as database
from store_ratings.core.errors import DatabaseError
from store_ratings.services.aggregation_reader import AggregationReader
from store_ratings.services.rating_ledger import RatingLedger

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])

SERVICE_NAME = "store-ratings-api"


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "service": SERVICE_NAME, "reason": reason},
    )


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME}


@router.get("/ready")
async def readiness():
    """Ready when the rating tables answer a count query."""
    manager = database.db_manager
    if manager is None:
        return _not_ready("database_not_initialized")
    try:
        async with manager.session() as db:
            totals = await AggregationReader(db, RatingLedger(db)).platform_totals()
    except DatabaseError as e:
        logger.error(f"Readiness check failed: {e.message}")
        return _not_ready("schema_unavailable")
    return {
        "status": "ready",
        "service": SERVICE_NAME,
        "database": manager.engine.dialect.name,
        "tables": totals,
    }
