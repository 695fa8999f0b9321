"""Admin Enforcement — pure checks behind the authorization gate.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - No session -> UnauthorizedError (401), always checked before any user lookup
    - Missing user record or non-admin role -> ForbiddenError (403)
    - Role comparison is exact: "admin" only, no case folding

Design Decisions:
    - Raise rather than return error dicts: callers are HTTP handlers, and the
      global handler already renders BlogError (ADR: uniform error shape)
    - Absent user and wrong role collapse into one outcome so the response
      never reveals which emails are registered
"""

from blogrpc.core.domain_types import SessionIdentity, UserRole
from blogrpc.core.errors import ForbiddenError, UnauthorizedError
from blogrpc.core.repository_protocols import UserLike


def require_session(identity: SessionIdentity | None) -> SessionIdentity:
    """Rule 1: mutations need a resolved session."""
    if identity is None:
        raise UnauthorizedError()
    return identity


def is_admin(user: UserLike | None) -> bool:
    return user is not None and user.role == UserRole.ADMIN.value


def require_admin(user: UserLike | None) -> UserLike:
    """Rule 2: the session's user must exist and hold the admin role."""
    if not is_admin(user):
        raise ForbiddenError()
    return user
