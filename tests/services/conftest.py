"""Service test fixtures — async DB, record store, service and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so readiness probes see the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for store and route tests
      (PostgreSQL-specific features not exercised here)
    - StaticPool: one shared connection, so every session sees the same in-memory DB
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from exoplanet_api.db.base import Base
from exoplanet_api.infrastructure.analysis_repository import SqlAnalysisRepository
from exoplanet_api.infrastructure.database import get_db, DatabaseSessionManager
from exoplanet_api.services.analysis_service import AnalysisService
import exoplanet_api.infrastructure.database as db_module
import exoplanet_api.models  # noqa: F401
from exoplanet_api.main import app

from tests.services.analysis_fixtures import (
    confirmed_exoplanet, strong_candidate, weak_signal,
)


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
def repository(test_db):
    return SqlAnalysisRepository(test_db)


@pytest.fixture
def service(repository):
    return AnalysisService(repository)


@pytest.fixture
async def seeded(service):
    """Three canonical records: confirmed (95.8), strong (75.5), weak (25.3)."""
    return [
        await service.save(confirmed_exoplanet()),
        await service.save(strong_candidate()),
        await service.save(weak_signal()),
    ]


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
