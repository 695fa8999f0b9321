"""User ORM — accounts known to the blog, looked up by email for authorization.

Invariants:
    - email is unique and non-nullable
    - role is a plain string; only "admin" grants mutation rights
    - Rows are created out of band — the RPC layer never writes users

Design Decisions:
    - Integer primary key: posts reference authors by numeric id on the wire
    - role as String over a DB enum: new non-privileged roles need no migration
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blogrpc.db.base import Base


class User(Base):
    """User account — author of posts when acting as admin."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="user",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    posts: Mapped[list["BlogPost"]] = relationship(
        "BlogPost", back_populates="author",
    )
