"""Auth Schemas — signup, login and password-change payloads.

Invariants:
    - Signup carries no role field: signup always creates Role.USER
    - Password fields are plain str here; policy enforced by the credential store

Design Decisions:
    - populate_by_name: tests and Python callers may use snake_case, clients send camelCase
"""

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    name: str
    email: str
    password: str
    address: str | None = None


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UpdatePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    old_password: str = Field(alias="oldPassword", min_length=1)
    new_password: str = Field(alias="newPassword", min_length=1)


class UserPublic(BaseModel):
    id: int
    name: str
    email: str
    address: str
    role: str


class LoginResponse(BaseModel):
    token: str
    user: UserPublic
