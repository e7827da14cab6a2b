"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - Implementations provided by shell via constructor injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass lightweight fakes
    - Async in Protocol: boundary methods are async because implementations do IO
"""

from typing import Any, Protocol

from store_ratings.core.domain_types import StoreId


class PasswordHasherLike(Protocol):
    """Contract for one-way password hashing — implemented by infrastructure."""
    def hash(self, plaintext: str) -> str: ...
    def verify(self, plaintext: str, hashed: str) -> bool: ...
    def dummy_verify(self) -> None: ...


class RatingListing(Protocol):
    """Read side of the rating ledger consumed by the aggregation reader."""
    async def list_for_store(self, store_id: StoreId) -> list[tuple[Any, Any]]: ...
