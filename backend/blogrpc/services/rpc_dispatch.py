"""RPC Dispatch — explicit routing from operation name to handler.

Invariants:
    - Every operation->handler mapping is visible — no getattr magic, no auto-discovery
    - Unknown operations raise UnknownOperationError (404)
    - Session identity is passed to every handler explicitly, never read from globals
    - Every BlogError leaving a handler is tagged with the operation name
    - Handlers instantiated per-request with the request's own repositories

Design Decisions:
    - Explicit dict over getattr: every mapping visible in one place
      (ADR: no convention-over-config)
    - Split handlers by audience (public vs admin): gate wiring is per class,
      not per method
"""

import logging
from typing import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from blogrpc.core.domain_types import RpcOperation, SessionIdentity
from blogrpc.core.errors import BlogError, ErrorContext, UnknownOperationError
from blogrpc.core.repository_protocols import PostRepository, UserRepository
from blogrpc.services.authorize_admin import AdminGate
from blogrpc.services.blog_repository import (
    SqlAlchemyPostRepository, SqlAlchemyUserRepository,
)
from blogrpc.services.handle_admin import AdminHandlers
from blogrpc.services.handle_public import PublicHandlers

logger = logging.getLogger(__name__)

Handler = Callable[[object, SessionIdentity | None], Awaitable[dict]]


class RpcDispatch:
    """Routes operation -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, posts: PostRepository, users: UserRepository):
        public = PublicHandlers(posts)
        admin = AdminHandlers(posts, AdminGate(users))

        # ADR: every mapping explicit — adding an operation requires editing this dict
        self._handlers: dict[str, Handler] = {
            # Public
            RpcOperation.GET_ALL_BLOGS.value: public.get_all_blogs,
            RpcOperation.GET_BLOG_BY_SLUG.value: public.get_blog_by_slug,

            # Admin
            RpcOperation.GET_BLOG_BY_ID.value: admin.get_blog_by_id,
            RpcOperation.CREATE_BLOG.value: admin.create_blog,
            RpcOperation.UPDATE_BLOG.value: admin.update_blog,
            RpcOperation.DELETE_BLOG.value: admin.delete_blog,
        }

    @classmethod
    def for_session(cls, db: AsyncSession) -> "RpcDispatch":
        """Wire SQLAlchemy repositories around one request's session."""
        return cls(SqlAlchemyPostRepository(db), SqlAlchemyUserRepository(db))

    async def execute(
        self,
        operation: str,
        payload: object,
        identity: SessionIdentity | None,
    ) -> dict:
        """Route operation to its handler and return the JSON-ready result."""
        handler = self._handlers.get(operation)
        if not handler:
            raise UnknownOperationError(
                operation, ErrorContext(operation=operation),
            )
        logger.info(f"RPC {operation}", extra={"operation": operation})
        try:
            return await handler(payload, identity)
        except BlogError as e:
            e.context.operation = operation
            raise
