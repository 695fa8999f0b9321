"""Blog Post Schemas — Pydantic models with field-level validation for RPC payloads.

Invariants:
    - BlogPostCreate: title 1-255, slug 1-255 + slug pattern, content non-empty,
      excerpt optional, published strict bool defaulting to False
    - BlogPostUpdate: every create field optional, id required; title/slug/content/
      published may be omitted but never null; excerpt may be null (clears it)
    - ListBlogPostsQuery: 1 <= page <= INT32_MAX (default 1), 1 <= limit <= 100
      (default 10), onlyPublished strict bool (default True)
    - Post ids are strict ints within the int4 column range: true and "1" are
      rejected, an in-range id that matches nothing is NotFound
    - Wire names are camelCase; Python attributes are snake_case

Design Decisions:
    - alias_generator=to_camel over per-field aliases: one rule for every model
    - Strict booleans and ints: "true"/1 and true/"1" are client bugs, not intent
    - Upper bounds on every integer: out-of-range values fail as a field
      error instead of overflowing the driver
    - PydanticCustomError for the slug rule: message reads as-is, no
      "Value error," prefix in the field map
    - Unknown keys ignored (pydantic default): the discriminator lives in the path
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from blogrpc.core.pagination import Pagination

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
TITLE_MAX_LENGTH = 255
SLUG_MAX_LENGTH = 255
PAGE_LIMIT_MAX = 100
# Integer columns are int4; ids outside this range can never match a row
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def check_slug(value: str) -> str:
    """Enforce lowercase, hyphen-separated slugs (e.g. my-post-1)."""
    if not SLUG_PATTERN.fullmatch(value):
        raise PydanticCustomError(
            "slug_format",
            "Slug must contain only lowercase letters, digits and single hyphens",
        )
    return value


class WireModel(BaseModel):
    """Base for models that cross the RPC boundary in camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests -----------------------------------------------------------------

class ListBlogPostsQuery(WireModel):
    """getAllBlogs payload."""
    page: int = Field(1, ge=1, le=INT32_MAX, strict=True)
    limit: int = Field(10, ge=1, le=PAGE_LIMIT_MAX, strict=True)
    only_published: bool = Field(True, strict=True)


class BlogPostSlugLookup(WireModel):
    """getBlogBySlug payload."""
    slug: str


class BlogPostIdLookup(WireModel):
    """getBlogById / deleteBlog payload."""
    id: int = Field(ge=INT32_MIN, le=INT32_MAX, strict=True)


class BlogPostCreate(WireModel):
    """createBlog payload."""
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    slug: str = Field(min_length=1, max_length=SLUG_MAX_LENGTH)
    excerpt: str | None = None
    content: str = Field(min_length=1)
    published: bool = Field(False, strict=True)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        return check_slug(v)


class BlogPostUpdate(WireModel):
    """updateBlog payload — partial create plus the target id."""
    id: int = Field(ge=INT32_MIN, le=INT32_MAX, strict=True)
    title: str | None = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    slug: str | None = Field(None, min_length=1, max_length=SLUG_MAX_LENGTH)
    excerpt: str | None = None
    content: str | None = Field(None, min_length=1)
    published: bool | None = Field(None, strict=True)

    @field_validator("title", "slug", "content", "published", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise PydanticCustomError(
                "not_nullable", "Field may be omitted but cannot be null",
            )
        return v

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str | None) -> str | None:
        return check_slug(v) if v is not None else v

    def changes(self) -> dict:
        """Fields the client actually sent, minus the id (snake_case keys)."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


# --- Responses ----------------------------------------------------------------

class BlogPostResponse(WireModel):
    """Post as returned by every RPC that yields a post."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    excerpt: str | None
    content: str
    published: bool
    author_id: int
    created_at: datetime
    updated_at: datetime


class PaginationMeta(WireModel):
    page: int
    limit: int
    total_pages: int
    total_count: int

    @classmethod
    def from_pagination(cls, pagination: Pagination) -> "PaginationMeta":
        return cls(
            page=pagination.page,
            limit=pagination.limit,
            total_pages=pagination.total_pages,
            total_count=pagination.total_count,
        )


class BlogPostPage(WireModel):
    """getAllBlogs response."""
    posts: list[BlogPostResponse]
    pagination: PaginationMeta


class DeleteResult(WireModel):
    success: bool = True


def dump_post(post: object) -> dict:
    """Serialize an ORM post (or any attribute-compatible object) to wire JSON."""
    return BlogPostResponse.model_validate(post).model_dump(
        mode="json", by_alias=True,
    )
