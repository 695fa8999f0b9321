"""Public Handlers — listing and slug lookup against in-memory repositories.

Tests cover:
    - pagination metadata and page size bounds
    - published filter applies to both the page and the count
    - read skew between page and count reads is accepted, not corrected
    - getBlogBySlug returns drafts (current behavior, flagged in DESIGN.md)
"""

import math

import pytest

from blogrpc.core.errors import PayloadValidationError, ResourceNotFoundError
from blogrpc.services.handle_public import PublicHandlers
from tests.services.fake_repositories import FakePostRepository


@pytest.fixture
def posts():
    repo = FakePostRepository()
    for i in range(1, 24):
        repo.seed(slug=f"post-{i}", published=i % 3 != 0)
    return repo


@pytest.fixture
def handlers(posts):
    return PublicHandlers(posts)


async def test_defaults_to_first_page_of_ten_published(handlers, posts):
    result = await handlers.get_all_blogs({}, None)
    published = sum(1 for p in posts.posts.values() if p.published)

    assert len(result["posts"]) == 10
    assert all(p["published"] for p in result["posts"])
    assert result["pagination"] == {
        "page": 1,
        "limit": 10,
        "totalPages": math.ceil(published / 10),
        "totalCount": published,
    }


async def test_newest_first(handlers):
    result = await handlers.get_all_blogs({"onlyPublished": False}, None)
    assert result["posts"][0]["slug"] == "post-23"
    created = [p["createdAt"] for p in result["posts"]]
    assert created == sorted(created, reverse=True)


@pytest.mark.parametrize("page, limit", [(1, 1), (2, 5), (3, 10), (5, 7), (100, 3)])
async def test_total_pages_and_page_size_hold(handlers, page, limit):
    result = await handlers.get_all_blogs(
        {"page": page, "limit": limit, "onlyPublished": False}, None,
    )
    meta = result["pagination"]
    assert meta["totalCount"] == 23
    assert meta["totalPages"] == math.ceil(23 / limit)
    assert len(result["posts"]) <= limit


async def test_count_uses_same_filter_as_page(handlers, posts):
    everything = await handlers.get_all_blogs({"onlyPublished": False}, None)
    published = await handlers.get_all_blogs({"onlyPublished": True}, None)
    assert everything["pagination"]["totalCount"] == len(posts.posts)
    assert published["pagination"]["totalCount"] < len(posts.posts)


async def test_page_past_end_is_empty_with_consistent_meta(handlers):
    result = await handlers.get_all_blogs({"page": 50, "onlyPublished": False}, None)
    assert result["posts"] == []
    assert result["pagination"]["page"] == 50
    assert result["pagination"]["totalPages"] == 3


async def test_page_and_count_are_independent_reads(posts):
    """A write landing between the page read and the count read shows up only
    in totalCount. Accepted read skew: no snapshot spans both reads."""
    original_count = posts.count

    async def count_after_concurrent_insert(only_published):
        posts.seed(slug="late-arrival", published=True)
        return await original_count(only_published)

    posts.count = count_after_concurrent_insert
    result = await PublicHandlers(posts).get_all_blogs({"limit": 100}, None)

    slugs = [p["slug"] for p in result["posts"]]
    assert "late-arrival" not in slugs
    assert result["pagination"]["totalCount"] == len(slugs) + 1
    assert posts.calls == ["list_page", "count"]


async def test_invalid_window_never_reaches_store(handlers, posts):
    with pytest.raises(PayloadValidationError) as exc_info:
        await handlers.get_all_blogs({"page": 0, "limit": 0}, None)
    assert set(exc_info.value.field_errors) == {"page", "limit"}
    assert posts.calls == []


async def test_get_by_slug_returns_post(handlers):
    post = await handlers.get_blog_by_slug({"slug": "post-1"}, None)
    assert post["slug"] == "post-1"
    assert set(post) == {
        "id", "title", "slug", "excerpt", "content", "published",
        "authorId", "createdAt", "updatedAt",
    }


async def test_get_by_slug_returns_drafts_too(handlers, posts):
    """Current behavior: no published filter on direct lookup (open question)."""
    draft = posts.seed(slug="secret-draft", published=False)
    post = await handlers.get_blog_by_slug({"slug": "secret-draft"}, None)
    assert post["id"] == draft.id
    assert post["published"] is False


async def test_get_by_slug_missing_raises_not_found(handlers):
    with pytest.raises(ResourceNotFoundError):
        await handlers.get_blog_by_slug({"slug": "nope"}, None)


async def test_get_by_slug_requires_slug(handlers, posts):
    with pytest.raises(PayloadValidationError) as exc_info:
        await handlers.get_blog_by_slug({}, None)
    assert "slug" in exc_info.value.field_errors
    assert posts.calls == []
