"""Root conftest - shared test configuration, async DB and FastAPI test clients.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db and get_settings dependencies overridden for route tests
    - Each client from make_client is a separate visitor with its own cookie jar

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - httpx ASGITransport does not run the lifespan, so no real engine is built
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import teamsignup.models  # noqa: E402,F401
from teamsignup.config import Settings, get_settings  # noqa: E402
from teamsignup.db.base import Base  # noqa: E402
from teamsignup.infrastructure.database import get_db  # noqa: E402
from teamsignup.main import app  # noqa: E402

TEST_ADMIN_PASSWORD = "test-admin-secret"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
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
def test_settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        admin_password=TEST_ADMIN_PASSWORD,
    )


@pytest.fixture
async def make_client(test_session_factory, test_settings):
    """Factory for FastAPI test clients sharing one test database."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    clients: list[AsyncClient] = []

    def _make() -> AsyncClient:
        c = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(c)
        return c

    yield _make

    for c in clients:
        await c.aclose()
    app.dependency_overrides.clear()


@pytest.fixture
async def client(make_client):
    return make_client()


@pytest.fixture
async def admin_client(make_client):
    c = make_client()
    res = await c.post("/api/admin/login", json={"password": TEST_ADMIN_PASSWORD})
    assert res.status_code == 200
    return c


@pytest.fixture
async def project_id(admin_client):
    res = await admin_client.post("/api/projects", json={"name": "Web Dev"})
    assert res.status_code == 200
    return res.json()["id"]
