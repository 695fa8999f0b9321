"""Public Handlers — getAllBlogs and getBlogBySlug (no session required).

Invariants:
    - Payload validated before any query runs
    - getAllBlogs issues two independent reads (page, count) — no snapshot between them
    - getBlogBySlug does NOT filter on published: drafts are reachable by slug

Design Decisions:
    - Accepted read skew: a write between the page and count reads can make
      totalCount disagree with the page by that write; no transaction is opened
      to prevent it (ADR: listing is advisory, never authoritative)
    - Draft visibility by slug preserved as-is (open question, see DESIGN.md):
      the dashboard relies on it for previewing unpublished posts
"""

import logging

from blogrpc.core.domain_types import SessionIdentity
from blogrpc.core.errors import ResourceNotFoundError
from blogrpc.core.pagination import Pagination, page_offset
from blogrpc.core.repository_protocols import PostRepository
from blogrpc.core.validate_payload import validate_payload
from blogrpc.schemas.blog_post import (
    BlogPostPage, BlogPostResponse, BlogPostSlugLookup, ListBlogPostsQuery,
    PaginationMeta, dump_post,
)

logger = logging.getLogger(__name__)


class PublicHandlers:
    """Read-only operations open to anonymous readers."""

    def __init__(self, posts: PostRepository):
        self._posts = posts

    async def get_all_blogs(
        self, payload: object, identity: SessionIdentity | None,
    ) -> dict:
        """Page of posts, newest first, with pagination metadata."""
        query = validate_payload(ListBlogPostsQuery, payload)
        posts = await self._posts.list_page(
            page_offset(query.page, query.limit), query.limit,
            query.only_published,
        )
        total_count = await self._posts.count(query.only_published)
        pagination = Pagination(
            page=query.page, limit=query.limit, total_count=total_count,
        )

        page = BlogPostPage(
            posts=[BlogPostResponse.model_validate(p) for p in posts],
            pagination=PaginationMeta.from_pagination(pagination),
        )
        return page.model_dump(mode="json", by_alias=True)

    async def get_blog_by_slug(
        self, payload: object, identity: SessionIdentity | None,
    ) -> dict:
        """Single post by slug, drafts included."""
        lookup = validate_payload(BlogPostSlugLookup, payload)
        post = await self._posts.get_by_slug(lookup.slug)
        if post is None:
            raise ResourceNotFoundError("Blog post", lookup.slug)
        return dump_post(post)
