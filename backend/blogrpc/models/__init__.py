"""ORM Models — SQLAlchemy declarative models for users and blog posts.

Invariants:
    - All models inherit from Base (db/base.py)
    - BlogPost.author_id references User.id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from blogrpc.models.user import User  # noqa: F401
from blogrpc.models.blog_post import BlogPost  # noqa: F401
