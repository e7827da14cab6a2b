"""Auth Routes — signup, login and password change.

Invariants:
    - Signup always creates Role.USER, whatever the payload contains
    - Login failures (unknown email, wrong password) share one 401 response
    - update-password requires a bearer token of any role
"""

import logging

from fastapi import APIRouter, Depends, status

from store_ratings.api.dependencies import (
    get_credential_store,
    get_token_service,
    require_any_role,
)
from store_ratings.core.domain_types import Identity, Role, UserId
from store_ratings.infrastructure.token_service import TokenService
from store_ratings.schemas.auth import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    UpdatePasswordRequest,
    UserPublic,
)
from store_ratings.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    credentials: CredentialStore = Depends(get_credential_store),
):
    user_id = await credentials.create(
        name=body.name,
        email=body.email,
        password=body.password,
        address=body.address,
        role=Role.USER,
    )
    return {"message": "User created successfully", "userId": user_id}


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    credentials: CredentialStore = Depends(get_credential_store),
    tokens: TokenService = Depends(get_token_service),
):
    user = await credentials.authenticate(body.email, body.password)
    token = tokens.issue(
        Identity(id=UserId(user.id), role=Role(user.role), email=user.email),
    )
    logger.info("Login succeeded", extra={"user_id": user.id, "role": user.role})
    return LoginResponse(token=token, user=UserPublic(**user.to_public()))


@router.patch("/update-password")
async def update_password(
    body: UpdatePasswordRequest,
    identity: Identity = Depends(require_any_role),
    credentials: CredentialStore = Depends(get_credential_store),
):
    await credentials.update_password(
        identity.id, body.old_password, body.new_password,
    )
    return {"message": "Password updated successfully"}
