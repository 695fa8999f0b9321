"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PostId and UserId wrap integers — never pass a bare int where an id is meant
    - UserRole has exactly one privileged value (ADMIN)
    - RpcOperation enumerates every wire discriminator — no raw string matching
    - SessionIdentity is immutable once resolved

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - UserRole is two-valued in practice: anything that is not "admin" is ordinary
      (ADR: the platform only distinguishes one privileged role)
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PostId = NewType("PostId", int)
UserId = NewType("UserId", int)


# ─── Enums ───────────────────────────────────────────────────────

class UserRole(str, Enum):
    """User roles as stored in users.role."""
    ADMIN = "admin"
    USER = "user"


class PublicationState(str, Enum):
    """The two publication states of a post, derived from the published flag."""
    DRAFT = "draft"
    PUBLISHED = "published"

    @classmethod
    def from_flag(cls, published: bool) -> "PublicationState":
        return cls.PUBLISHED if published else cls.DRAFT


class RpcOperation(str, Enum):
    """Wire discriminators under /api/rpc/."""
    GET_ALL_BLOGS = "getAllBlogs"
    GET_BLOG_BY_SLUG = "getBlogBySlug"
    GET_BLOG_BY_ID = "getBlogById"
    CREATE_BLOG = "createBlog"
    UPDATE_BLOG = "updateBlog"
    DELETE_BLOG = "deleteBlog"


# ─── Session ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class SessionIdentity:
    """Caller identity as resolved by the identity provider."""
    email: str
    subject: str | None = None
    name: str | None = None
