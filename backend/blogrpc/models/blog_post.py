"""BlogPost ORM — persists a markdown post and its publication flag.

Invariants:
    - slug is globally unique (named constraint uq_blog_posts_slug)
    - author_id always references an existing user
    - published defaults to False (new posts are drafts)
    - updated_at defaults to insert time; handlers stamp it on every update

Design Decisions:
    - Named unique constraint: the repository recognizes slug collisions by
      constraint name in IntegrityError, independent of the driver
    - Index on created_at: the listing orders by it on every request
"""

from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, Integer, Boolean, DateTime, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blogrpc.db.base import Base

SLUG_UNIQUE_CONSTRAINT = "uq_blog_posts_slug"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BlogPost(Base):
    """Blog post entity — draft or published."""
    __tablename__ = "blog_posts"
    __table_args__ = (
        UniqueConstraint("slug", name=SLUG_UNIQUE_CONSTRAINT),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    excerpt: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    author: Mapped["User"] = relationship("User", back_populates="posts")
