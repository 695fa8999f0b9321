"""RPC Dispatch — registration completeness, routing, operation tagging."""

import pytest
from httpx import ASGITransport, AsyncClient

from blogrpc.core.domain_types import RpcOperation
from blogrpc.core.errors import (
    PayloadValidationError,
    ResourceNotFoundError,
    UnauthorizedError,
    UnknownOperationError,
)
from blogrpc.main import app
from blogrpc.services.rpc_dispatch import RpcDispatch
from tests.services.fake_repositories import FakePostRepository, FakeUserRepository


@pytest.fixture
def posts():
    return FakePostRepository()


@pytest.fixture
def dispatch(posts):
    return RpcDispatch(posts, FakeUserRepository())


@pytest.mark.parametrize("operation", [op.value for op in RpcOperation])
async def test_every_operation_is_routed(dispatch, operation):
    """Anonymous empty calls reach a handler: success or a handler-level error."""
    try:
        await dispatch.execute(operation, {}, None)
    except UnknownOperationError:
        pytest.fail(f"{operation} is not registered")
    except (PayloadValidationError, UnauthorizedError) as e:
        assert e.context.operation == operation


async def test_routes_to_public_handler(dispatch, posts):
    posts.seed(slug="routed", published=True)
    result = await dispatch.execute("getBlogBySlug", {"slug": "routed"}, None)
    assert result["slug"] == "routed"


async def test_unknown_operation(dispatch):
    with pytest.raises(UnknownOperationError) as exc_info:
        await dispatch.execute("getblogbyslug", {}, None)
    assert exc_info.value.http_status == 404
    assert exc_info.value.context.operation == "getblogbyslug"


async def test_errors_are_tagged_with_operation(dispatch):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await dispatch.execute("getBlogBySlug", {"slug": "missing"}, None)
    assert exc_info.value.context.operation == "getBlogBySlug"
    assert exc_info.value.to_response()["error"]["context"]["operation"] == "getBlogBySlug"


async def test_unexpected_failure_is_opaque_500(client, monkeypatch):
    async def explode(self, operation, payload, identity):
        raise RuntimeError("connection string with password=hunter2")

    monkeypatch.setattr(RpcDispatch, "execute", explode)
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        res = await c.post("/api/rpc/getAllBlogs", json={})

    assert res.status_code == 500
    body = res.json()
    assert body["error"]["code"] == "INTERNAL_ERROR"
    assert "hunter2" not in res.text
