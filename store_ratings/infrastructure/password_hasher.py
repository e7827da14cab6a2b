"""Password Hasher — salted bcrypt digests with constant-time verification.

Invariants:
    - Plaintext is never stored or logged; only the bcrypt digest leaves this module
    - Every hash carries its own random salt (bcrypt format embeds it)
    - verify never raises on a well-formed hash; a malformed stored hash raises
      CredentialIntegrityError (fatal data-integrity error, 500)

Design Decisions:
    - passlib CryptContext over raw bcrypt: scheme identification and
      constant-time comparison come with the context
    - Cost factor injected from Settings.bcrypt_rounds: 10 in production, 4 in tests
"""

import logging

from passlib.context import CryptContext

from store_ratings.core.errors import CredentialIntegrityError

logger = logging.getLogger(__name__)


class PasswordHasher:
    """One-way bcrypt transform and verification."""

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Recompute and compare; False on mismatch."""
        if not hashed or self._context.identify(hashed) is None:
            logger.error("Stored password hash has an unrecognized format")
            raise CredentialIntegrityError()
        try:
            return self._context.verify(plaintext, hashed)
        except ValueError as e:
            logger.error(f"Stored password hash is malformed: {e}")
            raise CredentialIntegrityError()

    def dummy_verify(self) -> None:
        """Spend one verification's worth of CPU; used when the account is unknown."""
        self._context.dummy_verify()
