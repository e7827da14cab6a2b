"""Token Service — issues and verifies signed, time-bound identity assertions.

Invariants:
    - Stateless: validity is fully determined by signature + expiry, no session table
    - Claims: id (int), role (Role value), email (str), exp (absolute expiry)
    - Every verification failure surfaces as the same UnauthenticatedError;
      the underlying cause is logged at debug level only

Design Decisions:
    - python-jose JWT, HS256 by default
    - Secret, algorithm and lifetime are constructor arguments, never module globals
    - Role trusted from the token for its whole validity window (see DESIGN.md)
"""

import logging
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError

from store_ratings.core.domain_types import Identity, Role, UserId
from store_ratings.core.errors import UnauthenticatedError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = timedelta(hours=24)


class TokenService:
    """Signs and verifies bearer tokens for authenticated identities."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TOKEN_TTL,
    ):
        if not secret_key:
            raise ValueError("secret_key must be non-empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl = ttl

    def issue(self, identity: Identity, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "id": int(identity.id),
            "role": identity.role.value,
            "email": identity.email,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Identity:
        """Decode token into an Identity or raise UnauthenticatedError."""
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require_exp": True},
            )
        except JWTError as e:
            logger.debug(f"Token rejected: {type(e).__name__}")
            raise UnauthenticatedError()
        return _identity_from_claims(payload)


def _identity_from_claims(payload: dict) -> Identity:
    """Validate claim shapes; signature-valid but malformed payloads are rejected too."""
    user_id = payload.get("id")
    email = payload.get("email")
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        logger.debug("Token rejected: id claim missing or not an integer")
        raise UnauthenticatedError()
    if not isinstance(email, str) or not email:
        logger.debug("Token rejected: email claim missing")
        raise UnauthenticatedError()
    try:
        role = Role(payload.get("role"))
    except ValueError:
        logger.debug("Token rejected: unknown role claim")
        raise UnauthenticatedError()
    return Identity(id=UserId(user_id), role=role, email=email)
