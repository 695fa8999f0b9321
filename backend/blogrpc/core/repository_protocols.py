"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Repositories hand back ORM-shaped objects typed by the *Like protocols,
      so handlers stay decoupled from SQLAlchemy while mypy still sees fields
    - PostRepository.insert/update raise SlugConflictError themselves: the store's
      unique constraint is the only authority on slug collisions
"""

from datetime import datetime
from typing import Any, Protocol

from blogrpc.core.domain_types import PostId, SessionIdentity, UserId


class UserLike(Protocol):
    """Structural contract for User records used by the authorization gate."""
    id: UserId
    email: str
    name: str | None
    role: str


class BlogPostLike(Protocol):
    """Structural contract for BlogPost records returned by the store."""
    id: PostId
    title: str
    slug: str
    excerpt: str | None
    content: str
    published: bool
    author_id: UserId
    created_at: datetime
    updated_at: datetime


class UserRepository(Protocol):
    """Contract for user lookups — implemented by shell."""
    async def get_by_email(self, email: str) -> UserLike | None: ...


class PostRepository(Protocol):
    """Contract for blog post persistence — implemented by shell."""
    async def list_page(
        self, offset: int, limit: int, only_published: bool,
    ) -> list[BlogPostLike]: ...
    async def count(self, only_published: bool) -> int: ...
    async def get_by_slug(self, slug: str) -> BlogPostLike | None: ...
    async def get_by_id(self, post_id: PostId) -> BlogPostLike | None: ...
    async def insert(
        self, fields: dict[str, Any], author_id: UserId,
    ) -> BlogPostLike: ...
    async def update(
        self, post: BlogPostLike, changes: dict[str, Any],
    ) -> BlogPostLike: ...
    async def delete(self, post: BlogPostLike) -> None: ...


class IdentityProvider(Protocol):
    """Contract for session resolution — implemented by infrastructure."""
    async def resolve_session(
        self, token: str | None,
    ) -> SessionIdentity | None: ...
