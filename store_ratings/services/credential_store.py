"""Credential Store — creates, looks up and re-keys user accounts.

Invariants:
    - Every field is validated (core/validate_credentials.py) before storage is touched
    - Passwords are hashed before persisting; plaintext never reaches the DB
    - Duplicate email detected by the storage unique constraint, translated to
      DuplicateEmailError (no check-then-insert)
    - update_password replaces the hash in one commit or not at all

Design Decisions:
    - authenticate() returns the same InvalidCredentialError for unknown email and
      wrong password, and burns a dummy hash for unknown email
    - Role passed explicitly: signup forces Role.USER, admin provisioning passes any role
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from store_ratings.core.domain_types import Role, UserId
from store_ratings.core.errors import (
    DatabaseError,
    DuplicateEmailError,
    InvalidCredentialError,
    ResourceNotFoundError,
)
from store_ratings.core.repository_protocols import PasswordHasherLike
from store_ratings.core.validate_credentials import (
    validate_address,
    validate_email,
    validate_name,
    validate_password,
    validate_role,
)
from store_ratings.models.user import User

logger = logging.getLogger(__name__)


def is_unique_email_violation(error: IntegrityError) -> bool:
    """True when the IntegrityError comes from an email unique constraint."""
    detail = str(error.orig).lower()
    return "email" in detail and ("unique" in detail or "duplicate" in detail)


class CredentialStore:
    """User persistence with validation and password hashing."""

    def __init__(self, db: AsyncSession, hasher: PasswordHasherLike):
        self.db = db
        self.hasher = hasher

    async def create(
        self,
        name: str,
        email: str,
        password: str,
        address: str | None,
        role: Role | str = Role.USER,
    ) -> UserId:
        """Validate, hash and insert a user. Returns the new id."""
        user = User(
            name=validate_name(name),
            email=validate_email(email),
            address=validate_address(address),
            role=validate_role(role).value,
            password_hash=self.hasher.hash(validate_password(password)),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if is_unique_email_violation(e):
                raise DuplicateEmailError("User")
            logger.error(f"User insert failed: {e}")
            raise DatabaseError("Integrity constraint violated", "insert")
        logger.info(
            "User created", extra={"user_id": user.id, "role": user.role},
        )
        return UserId(user.id)

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: UserId) -> User | None:
        return await self.db.get(User, user_id)

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user whose password verifies, else InvalidCredentialError."""
        user = await self.find_by_email(email)
        if user is None:
            self.hasher.dummy_verify()
            raise InvalidCredentialError()
        if not self.hasher.verify(password, user.password_hash):
            raise InvalidCredentialError()
        return user

    async def update_password(
        self, user_id: UserId, old_plain: str, new_plain: str,
    ) -> None:
        """Replace the stored hash after verifying the current password."""
        validate_password(new_plain, field="newPassword")
        user = await self.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(user_id))
        if not self.hasher.verify(old_plain, user.password_hash):
            raise InvalidCredentialError("Current password is incorrect")
        user.password_hash = self.hasher.hash(new_plain)
        await self.db.commit()
        logger.info("Password updated", extra={"user_id": user.id})
