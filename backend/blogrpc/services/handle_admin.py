"""Admin Handlers — createBlog, updateBlog, deleteBlog, getBlogById.

Invariants:
    - Order per call: authorization gate -> payload validation -> store access
    - A rejected payload never reaches the store (validation is whole-payload)
    - createBlog stamps authorId with the gate's admin user id
    - updateBlog applies only the fields the client sent and always stamps updated_at
    - deleteBlog is an unconditional hard delete of an existing post

Design Decisions:
    - No slug pre-check on create/update: the repository maps the unique
      constraint violation to SlugConflictError, closing the check-then-write race
    - Existence check by id stays a read-before-write: NotFound must win over
      any other outcome for a missing post
"""

import logging
from datetime import datetime, timezone

from blogrpc.core.domain_types import PostId, PublicationState, SessionIdentity
from blogrpc.core.errors import ResourceNotFoundError
from blogrpc.core.repository_protocols import BlogPostLike, PostRepository
from blogrpc.core.validate_payload import validate_payload
from blogrpc.schemas.blog_post import (
    BlogPostCreate, BlogPostIdLookup, BlogPostUpdate, DeleteResult, dump_post,
)
from blogrpc.services.authorize_admin import AdminGate

logger = logging.getLogger(__name__)


class AdminHandlers:
    """Mutating and preview operations, gated on the admin role."""

    def __init__(self, posts: PostRepository, gate: AdminGate):
        self._posts = posts
        self._gate = gate

    async def create_blog(
        self, payload: object, identity: SessionIdentity | None,
    ) -> dict:
        """Insert a new post authored by the calling admin."""
        admin = await self._gate.authorize(identity)
        data = validate_payload(BlogPostCreate, payload)

        post = await self._posts.insert(data.model_dump(), admin.id)
        logger.info(
            f"Created post {post.id} as "
            f"{PublicationState.from_flag(post.published).value}",
            extra={"post_id": post.id, "slug": post.slug},
        )
        return dump_post(post)

    async def update_blog(
        self, payload: object, identity: SessionIdentity | None,
    ) -> dict:
        """Apply a partial update to an existing post."""
        await self._gate.authorize(identity)
        data = validate_payload(BlogPostUpdate, payload)
        post = await self._get_or_404(data.id)

        changes = data.changes()
        changes["updated_at"] = datetime.now(timezone.utc)
        post = await self._posts.update(post, changes)
        logger.info(
            f"Updated post {post.id} "
            f"({', '.join(sorted(changes))}); now "
            f"{PublicationState.from_flag(post.published).value}",
            extra={"post_id": post.id, "slug": post.slug},
        )
        return dump_post(post)

    async def delete_blog(
        self, payload: object, identity: SessionIdentity | None,
    ) -> dict:
        """Hard-delete a post."""
        await self._gate.authorize(identity)
        lookup = validate_payload(BlogPostIdLookup, payload)
        post = await self._get_or_404(lookup.id)

        await self._posts.delete(post)
        logger.info(
            f"Deleted post {lookup.id}", extra={"post_id": lookup.id},
        )
        return DeleteResult().model_dump(by_alias=True)

    async def get_blog_by_id(
        self, payload: object, identity: SessionIdentity | None,
    ) -> dict:
        """Load any post (drafts included) by id for the dashboard."""
        await self._gate.authorize(identity)
        lookup = validate_payload(BlogPostIdLookup, payload)
        post = await self._get_or_404(lookup.id)
        return dump_post(post)

    async def _get_or_404(self, post_id: int) -> BlogPostLike:
        post = await self._posts.get_by_id(PostId(post_id))
        if post is None:
            raise ResourceNotFoundError("Blog post", str(post_id))
        return post
