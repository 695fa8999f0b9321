"""Blog Repositories — SQLAlchemy implementations of the core repository protocols.

Invariants:
    - Every method reads or writes through the request's AsyncSession; nothing cached
    - Writes commit immediately; a failed commit is rolled back before raising
    - Slug collisions surface as SlugConflictError, detected from the unique
      constraint (uq_blog_posts_slug) — never from a read-before-write check
    - Listing order: created_at DESC, then id DESC (stable across equal timestamps)

Design Decisions:
    - Constraint-driven conflict detection: two concurrent creators with the same
      slug cannot both succeed; the loser gets SlugConflictError
    - Other IntegrityErrors re-raised untouched: DatabaseSessionManager maps them to 503
    - Count query shares the filter but not the page window: totalCount reflects
      the full matching set
"""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blogrpc.core.domain_types import PostId, UserId
from blogrpc.core.errors import SlugConflictError
from blogrpc.models.blog_post import BlogPost, SLUG_UNIQUE_CONSTRAINT
from blogrpc.models.user import User

logger = logging.getLogger(__name__)


def is_slug_violation(exc: IntegrityError) -> bool:
    """True when the integrity error came from the slug unique constraint."""
    message = str(exc.orig)
    return SLUG_UNIQUE_CONSTRAINT in message or "blog_posts.slug" in message


class SqlAlchemyUserRepository:
    """UserRepository over the users table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get_by_email(self, email: str) -> User | None:
        result = await self._db.execute(
            select(User).where(User.email == email),
        )
        return result.scalar_one_or_none()


class SqlAlchemyPostRepository:
    """PostRepository over the blog_posts table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_page(
        self, offset: int, limit: int, only_published: bool,
    ) -> list[BlogPost]:
        query = select(BlogPost).order_by(
            BlogPost.created_at.desc(), BlogPost.id.desc(),
        )
        if only_published:
            query = query.where(BlogPost.published.is_(True))
        query = query.limit(limit).offset(offset)

        result = await self._db.execute(query)
        return list(result.scalars().all())

    async def count(self, only_published: bool) -> int:
        query = select(func.count()).select_from(BlogPost)
        if only_published:
            query = query.where(BlogPost.published.is_(True))
        result = await self._db.execute(query)
        return result.scalar_one()

    async def get_by_slug(self, slug: str) -> BlogPost | None:
        result = await self._db.execute(
            select(BlogPost).where(BlogPost.slug == slug),
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, post_id: PostId) -> BlogPost | None:
        return await self._db.get(BlogPost, post_id)

    async def insert(
        self, fields: dict[str, Any], author_id: UserId,
    ) -> BlogPost:
        post = BlogPost(**fields, author_id=author_id)
        self._db.add(post)
        await self._commit_or_conflict(post.slug)
        await self._db.refresh(post)
        return post

    async def update(
        self, post: BlogPost, changes: dict[str, Any],
    ) -> BlogPost:
        slug = changes.get("slug", post.slug)
        for name, value in changes.items():
            setattr(post, name, value)
        await self._commit_or_conflict(slug)
        await self._db.refresh(post)
        return post

    async def delete(self, post: BlogPost) -> None:
        await self._db.delete(post)
        await self._db.commit()

    async def _commit_or_conflict(self, slug: str) -> None:
        """Commit, translating a slug constraint violation into SlugConflictError."""
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            if is_slug_violation(e):
                logger.info(
                    f"Slug '{slug}' rejected by unique constraint",
                    extra={"slug": slug, "error_code": "SLUG_CONFLICT"},
                )
                raise SlugConflictError(slug) from e
            raise
