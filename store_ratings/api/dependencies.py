"""API Dependencies — identity extraction, the role gate and service wiring.

Invariants:
    - A route restricted by require_roles never runs its body unless the gate ALLOWs
    - Missing bearer token → 401; invalid/expired token → 401 (single message);
      valid token with a role outside the set → 403
    - TokenService and PasswordHasher built once per process from Settings

Design Decisions:
    - HTTPBearer(auto_error=False): absence is reported by the role gate, so every
      401 goes through the same error envelope
    - Services constructed per request around the request's AsyncSession
"""

from collections.abc import Callable
from datetime import timedelta
from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from store_ratings.config import get_settings
from store_ratings.core.authorize import authorize, enforce_access
from store_ratings.core.domain_types import Identity, Role
from store_ratings.infrastructure.database import get_db
from store_ratings.infrastructure.password_hasher import PasswordHasher
from store_ratings.infrastructure.token_service import TokenService
from store_ratings.services.aggregation_reader import AggregationReader
from store_ratings.services.credential_store import CredentialStore
from store_ratings.services.rating_ledger import RatingLedger
from store_ratings.services.store_registry import StoreRegistry

_bearer = HTTPBearer(auto_error=False)


@lru_cache
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(hours=settings.access_token_ttl_hours),
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().bcrypt_rounds)


async def get_optional_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    tokens: TokenService = Depends(get_token_service),
) -> Identity | None:
    """Decode the bearer token if one was sent."""
    if credentials is None:
        return None
    return tokens.verify(credentials.credentials)


def require_roles(*roles: Role) -> Callable:
    """Dependency factory: authenticated identity whose role is in `roles`."""
    allowed = frozenset(roles)

    async def role_gate(
        identity: Identity | None = Depends(get_optional_identity),
    ) -> Identity:
        return enforce_access(authorize(identity, allowed), identity)

    return role_gate


require_any_role = require_roles(Role.ADMIN, Role.USER, Role.OWNER)


def get_credential_store(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> CredentialStore:
    return CredentialStore(db, hasher)


def get_rating_ledger(db: AsyncSession = Depends(get_db)) -> RatingLedger:
    return RatingLedger(db)


def get_aggregation_reader(
    db: AsyncSession = Depends(get_db),
    ledger: RatingLedger = Depends(get_rating_ledger),
) -> AggregationReader:
    return AggregationReader(db, ledger)


def get_store_registry(db: AsyncSession = Depends(get_db)) -> StoreRegistry:
    return StoreRegistry(db)
