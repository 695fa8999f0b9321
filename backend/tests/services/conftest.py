"""Service test fixtures — async DB, seeded users, signed session tokens, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Session tokens are real HS256 JWTs signed with the test secret

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for RPC tests
      (ADR: PostgreSQL-specific features not exercised here)
    - Real tokens over overriding get_session_identity: exercises the identity
      adapter end to end
"""

import os
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from blogrpc.db.base import Base
from blogrpc.infrastructure.database import get_db, DatabaseSessionManager
from blogrpc.models.user import User
import blogrpc.infrastructure.database as db_module
from blogrpc.main import app

TEST_JWT_SECRET = os.environ["AUTH_JWT_SECRET"]
ADMIN_EMAIL = "admin@example.com"
READER_EMAIL = "reader@example.com"


def make_token(email: str | None, secret: str = TEST_JWT_SECRET, **claims) -> str:
    """Mint a session token the way the identity provider would."""
    payload = {
        "sub": f"auth|{email}",
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        **claims,
    }
    if email is not None:
        payload["email"] = email
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(email: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(email)}"}


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seed_users(test_db):
    """An admin and an ordinary reader."""
    admin = User(email=ADMIN_EMAIL, name="Admin", role="admin")
    reader = User(email=READER_EMAIL, name="Reader", role="user")
    test_db.add_all([admin, reader])
    await test_db.commit()
    await test_db.refresh(admin)
    await test_db.refresh(reader)
    return {"admin": admin, "reader": reader}


@pytest.fixture
def admin_headers(seed_users):
    return bearer(ADMIN_EMAIL)


@pytest.fixture
def reader_headers(seed_users):
    return bearer(READER_EMAIL)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def rpc(client):
    """Call an RPC operation: await rpc("createBlog", {...}, headers)."""
    async def _call(operation: str, payload=None, headers=None):
        return await client.post(
            f"/api/rpc/{operation}", json=payload, headers=headers or {},
        )
    return _call


@pytest.fixture
def create_post(rpc, admin_headers):
    """Create a post through the RPC surface and return its JSON."""
    async def _create(slug: str, published: bool = True, **fields):
        payload = {
            "title": fields.pop("title", slug.replace("-", " ").title()),
            "slug": slug,
            "content": fields.pop("content", f"# {slug}"),
            "published": published,
            **fields,
        }
        res = await rpc("createBlog", payload, admin_headers)
        assert res.status_code == 200, res.text
        return res.json()
    return _create
