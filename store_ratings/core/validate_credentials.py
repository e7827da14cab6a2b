"""Credential & Profile Validation — field policies for users and stores.

Invariants:
    - Every validator is PURE: returns the value unchanged or raises InvalidInputError
    - NAME: 20–60 chars; ADDRESS: ≤400 chars; PASSWORD: 8–16 chars with ≥1 uppercase
      and ≥1 of !@#$%^&*; RATING: integer 1–5
    - Validation runs before any storage call

Design Decisions:
    - Policy constants module-level: single source of truth for both users and stores
    - bool is rejected as a rating value even though it subclasses int
"""

import re

from store_ratings.core.domain_types import MAX_RATING, MIN_RATING, Role
from store_ratings.core.errors import InvalidInputError


NAME_MIN_LENGTH: int = 20
NAME_MAX_LENGTH: int = 60
ADDRESS_MAX_LENGTH: int = 400
PASSWORD_MIN_LENGTH: int = 8
PASSWORD_MAX_LENGTH: int = 16
PASSWORD_SPECIAL_CHARS: str = "!@#$%^&*"

_EMAIL_RE = re.compile(r"^[\w.-]+@([\w-]+\.)+[\w-]{2,4}$")
_UPPERCASE_RE = re.compile(r"[A-Z]")
_SPECIAL_RE = re.compile(f"[{re.escape(PASSWORD_SPECIAL_CHARS)}]")


def validate_name(name: str | None, label: str = "Name") -> str:
    if not name or not (NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH):
        raise InvalidInputError(
            f"{label} must be {NAME_MIN_LENGTH}-{NAME_MAX_LENGTH} characters",
            "name",
        )
    return name


def validate_email(email: str | None) -> str:
    if not email or not _EMAIL_RE.match(email):
        raise InvalidInputError("Invalid email format", "email")
    return email


def validate_password(password: str | None, field: str = "password") -> str:
    """Password policy: 8–16 chars, one uppercase, one special character."""
    if (
        not password
        or not (PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH)
        or not _UPPERCASE_RE.search(password)
        or not _SPECIAL_RE.search(password)
    ):
        raise InvalidInputError(
            f"Password must be {PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} "
            "characters with at least one uppercase letter and one special "
            f"character ({PASSWORD_SPECIAL_CHARS})",
            field,
        )
    return password


def validate_address(address: str | None) -> str:
    """Address is optional; absent becomes empty string."""
    if address is None:
        return ""
    if len(address) > ADDRESS_MAX_LENGTH:
        raise InvalidInputError(
            f"Address must be at most {ADDRESS_MAX_LENGTH} characters", "address",
        )
    return address


def validate_role(role: str | Role) -> Role:
    try:
        return Role(role)
    except ValueError:
        raise InvalidInputError(
            "Invalid role. Must be admin, user, or owner", "role",
        )


def validate_rating_value(value: object) -> int:
    if (
        isinstance(value, bool)
        or not isinstance(value, int)
        or not (MIN_RATING <= value <= MAX_RATING)
    ):
        raise InvalidInputError(
            f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}",
            "rating",
        )
    return value
