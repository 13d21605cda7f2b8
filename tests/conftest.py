"""Pytest configuration and fixtures for showplan.

Uses showplan.main:app for HTTP tests and showplan.infrastructure.persistence.database
for DB-dependent fixtures. Unit tests run against tests.fakes (no database).
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from showplan.infrastructure.persistence import database
from showplan.main import app
from tests.fakes import Planning

ACTOR_HEADERS = {"X-User-ID": "user-1"}


@pytest.fixture
async def client() -> AsyncClient:
    """httpx client bound to the ASGI app; no server process."""
    transport = ASGITransport(app=app, client=("203.0.113.10", 50000))
    async with AsyncClient(transport=transport, base_url="http://showplan.test") as http:
        yield http


@pytest.fixture
def planning() -> Planning:
    """Planning services over an in-memory store seeded with reference rows."""
    harness = Planning()
    harness.store.seed_references()
    return harness


@pytest.fixture
async def db_session() -> AsyncSession:
    """Real Postgres session, rolled back after the test.

    Requires DATABASE_URL with migrations applied (alembic upgrade head).
    Skips when Postgres is not configured; run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
    # Pooled asyncpg connections belong to this test's event loop.
    await database.dispose_engine()
