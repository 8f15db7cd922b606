"""
Pytest configuration and shared fixtures.

Repository, service and API tests run against a throwaway SQLite file via
aiosqlite. Tests marked `db` use the configured DATABASE_URL instead and are
skipped unless RUN_DB_TESTS=1.
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import app.models  # noqa: F401
from app.core.config import settings
from app.db.base import Base
from app.core.dependencies import get_db
from app.main import app as fastapi_app


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")
    config.addinivalue_line("markers", "db: requires database")


def pytest_collection_modifyitems(config, items):
    run_db = os.environ.get("RUN_DB_TESTS") == "1"

    skip_db = pytest.mark.skip(reason="db tests skipped by default; set RUN_DB_TESTS=1 to enable")

    for item in items:
        if "db" in item.keywords and not run_db:
            item.add_marker(skip_db)


@pytest.fixture
def no_search_latency(monkeypatch):
    """Drop the simulated search delay so API tests stay fast."""
    monkeypatch.setattr(settings, "SEARCH_LATENCY_MIN_MS", 0)
    monkeypatch.setattr(settings, "SEARCH_LATENCY_MAX_MS", 0)


@pytest_asyncio.fixture
async def session_maker(tmp_path):
    db_path = tmp_path / "product_research.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_maker, no_search_latency):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    fastapi_app.dependency_overrides.pop(get_db, None)
