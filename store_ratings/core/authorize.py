"""Role Gate — decides whether an identity may perform a role-restricted operation.

Invariants:
    - authorize is PURE: no IO, no logging, no mutation
    - Absent identity → DENY_UNAUTHENTICATED (401); role outside the set → DENY_FORBIDDEN (403)
    - enforce_access is the only place a deny becomes an exception

Design Decisions:
    - Decision enum over bool: the caller needs to know WHICH deny to report
    - Allowed sets are frozensets of Role, declared once per route via require_roles
"""

from collections.abc import Iterable
from enum import Enum

from store_ratings.core.domain_types import Identity, Role
from store_ratings.core.errors import ForbiddenError, UnauthenticatedError


class AccessDecision(str, Enum):
    ALLOW = "allow"
    DENY_UNAUTHENTICATED = "deny_unauthenticated"
    DENY_FORBIDDEN = "deny_forbidden"


def authorize(
    identity: Identity | None, allowed_roles: Iterable[Role],
) -> AccessDecision:
    """Check identity's role against the allowed set. Pure."""
    if identity is None:
        return AccessDecision.DENY_UNAUTHENTICATED
    if identity.role not in frozenset(allowed_roles):
        return AccessDecision.DENY_FORBIDDEN
    return AccessDecision.ALLOW


def enforce_access(decision: AccessDecision, identity: Identity | None) -> Identity:
    """Raise the error matching a deny; return the identity on allow."""
    if decision is AccessDecision.DENY_UNAUTHENTICATED or identity is None:
        raise UnauthenticatedError("Authentication required")
    if decision is AccessDecision.DENY_FORBIDDEN:
        raise ForbiddenError(identity.role.value)
    return identity
