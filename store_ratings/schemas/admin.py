"""Admin Schemas — user provisioning and store creation payloads."""

from pydantic import BaseModel, Field

from store_ratings.core.domain_types import Role


class CreateUserRequest(BaseModel):
    name: str
    email: str
    password: str
    address: str | None = None
    role: Role


class CreateStoreRequest(BaseModel):
    name: str
    email: str
    address: str | None = None
    owner_id: int | None = Field(None, gt=0)
