"""Authorization Gate — admits only admin sessions to mutating operations.

Invariants:
    - Runs before payload validation and before any post is read or written
    - Re-resolves the user and role on every call (no caching across requests)
    - Lookup key is the session email; the only side effect is that read
"""

import logging

from blogrpc.core.domain_types import SessionIdentity
from blogrpc.core.enforce_admin import is_admin, require_admin, require_session
from blogrpc.core.repository_protocols import UserLike, UserRepository

logger = logging.getLogger(__name__)


class AdminGate:
    """Resolves the caller's User record and requires the admin role."""

    def __init__(self, users: UserRepository):
        self._users = users

    async def authorize(self, identity: SessionIdentity | None) -> UserLike:
        """Return the admin's User record, or raise Unauthorized/Forbidden."""
        if identity is None:
            logger.warning(
                "Mutation attempted without session",
                extra={"error_code": "UNAUTHORIZED"},
            )
        session = require_session(identity)

        user = await self._users.get_by_email(session.email)
        if not is_admin(user):
            logger.warning(
                "Non-admin session denied",
                extra={"error_code": "FORBIDDEN"},
            )
        return require_admin(user)
