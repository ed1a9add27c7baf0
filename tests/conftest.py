"""
Shared test fixtures.

Every test gets its own in-memory SQLite database. API tests talk to the
real application through httpx's ASGITransport with get_db overridden to
point at that database.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.session import get_db
from app.models import Base
from app.services.report_service import ReportService
from main import app


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_factory):
    """A session for service-level tests. Do not combine with `client`."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """API client bound to a fresh database with the report templates seeded."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async with session_factory() as session:
        await ReportService.seed_report_templates(session)
        await session.commit()

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    """Register a user, log in, and return Authorization headers."""

    async def _signup(email: str, role: str = "organization") -> dict:
        response = await client.post(
            "/api/register",
            json={
                "email": email,
                "password": "secret123",
                "firstName": "Test",
                "lastName": "User",
                "role": role,
            },
        )
        assert response.status_code == 201, response.text
        response = await client.post(
            "/api/login", json={"email": email, "password": "secret123"}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['accessToken']}"}

    return _signup


@pytest.fixture
def create_org(client):
    """Create an organization owned by the given user and return its id."""

    async def _create_org(headers: dict, name: str = "Acme Corp") -> str:
        response = await client.post(
            "/api/organizations",
            json={"name": name, "industry": "Manufacturing", "country": "Germany"},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _create_org
