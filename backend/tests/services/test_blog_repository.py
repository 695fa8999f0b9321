"""SQLAlchemy repositories — constraint-driven slug conflicts and query shape.

Invariants:
    - A duplicate slug is rejected by uq_blog_posts_slug and surfaces as SlugConflictError
    - The session stays usable after a rejected write (rolled back)
    - Non-slug integrity errors are not mistaken for slug conflicts
"""

import pytest
from sqlalchemy.exc import IntegrityError

from blogrpc.core.errors import SlugConflictError
from blogrpc.services.blog_repository import (
    SqlAlchemyPostRepository,
    SqlAlchemyUserRepository,
    is_slug_violation,
)


def _fields(slug: str, published: bool = True) -> dict:
    return {
        "title": slug, "slug": slug, "content": "body",
        "excerpt": None, "published": published,
    }


@pytest.fixture
def repo(test_db):
    return SqlAlchemyPostRepository(test_db)


async def test_insert_assigns_id_and_timestamps(repo, seed_users):
    post = await repo.insert(_fields("fresh"), seed_users["admin"].id)
    assert post.id is not None
    assert post.created_at is not None
    assert post.updated_at is not None
    assert post.author_id == seed_users["admin"].id


@pytest.mark.parametrize("first, second", [("a", "b"), ("b", "a")])
async def test_duplicate_slug_always_conflicts(repo, seed_users, first, second):
    author = seed_users["admin"].id
    await repo.insert({**_fields("same"), "title": first}, author)

    with pytest.raises(SlugConflictError) as exc_info:
        await repo.insert({**_fields("same"), "title": second}, author)
    assert exc_info.value.slug == "same"

    assert await repo.count(only_published=False) == 1
    survivor = await repo.get_by_slug("same")
    assert survivor.title == first


async def test_session_usable_after_conflict(repo, seed_users):
    author = seed_users["admin"].id
    await repo.insert(_fields("taken"), author)
    with pytest.raises(SlugConflictError):
        await repo.insert(_fields("taken"), author)

    other = await repo.insert(_fields("other"), author)
    assert other.slug == "other"


async def test_update_to_taken_slug_conflicts(repo, seed_users):
    author = seed_users["admin"].id
    await repo.insert(_fields("taken"), author)
    mine = await repo.insert(_fields("mine"), author)
    mine_id = mine.id

    with pytest.raises(SlugConflictError):
        await repo.update(mine, {"slug": "taken"})

    reloaded = await repo.get_by_id(mine_id)
    assert reloaded.slug == "mine"


async def test_list_page_filters_and_orders(repo, seed_users):
    author = seed_users["admin"].id
    for i in range(5):
        await repo.insert(_fields(f"p-{i}", published=i != 2), author)

    page = await repo.list_page(offset=0, limit=10, only_published=True)
    assert [p.slug for p in page] == ["p-4", "p-3", "p-1", "p-0"]
    assert await repo.count(only_published=True) == 4

    window = await repo.list_page(offset=1, limit=2, only_published=False)
    assert [p.slug for p in window] == ["p-3", "p-2"]


async def test_delete_removes_row(repo, seed_users):
    post = await repo.insert(_fields("gone"), seed_users["admin"].id)
    await repo.delete(post)
    assert await repo.get_by_id(post.id) is None


async def test_user_lookup_by_email(test_db, seed_users):
    users = SqlAlchemyUserRepository(test_db)
    assert (await users.get_by_email("admin@example.com")).role == "admin"
    assert await users.get_by_email("missing@example.com") is None


@pytest.mark.parametrize("message, expected", [
    ("UNIQUE constraint failed: blog_posts.slug", True),
    ('duplicate key value violates unique constraint "uq_blog_posts_slug"', True),
    ("UNIQUE constraint failed: users.email", False),
    ("FOREIGN KEY constraint failed", False),
])
def test_is_slug_violation(message, expected):
    exc = IntegrityError("INSERT ...", {}, Exception(message))
    assert is_slug_violation(exc) is expected
