"""Service test fixtures — per-test SQLite database, repositories, HTTP client.

Invariants:
    - Each test runs against its own in-memory SQLite schema
    - The client resolves get_habit_repository to a SqlHabitRepository on that schema
    - db_manager points at the test engine while the client is open, then is restored

Design Decisions:
    - SQLite in-memory is enough here: the JSON columns behave the same as on
      PostgreSQL, and no PostgreSQL-only features are used
    - memory_repository gives service tests a store with no engine at all
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

import habit_tracking.infrastructure.database as db_module
import habit_tracking.models  # noqa: F401  (registers HabitRecord)
from habit_tracking.db.base import Base
from habit_tracking.infrastructure.database import DatabaseSessionManager
from habit_tracking.infrastructure.in_memory_habit_repository import InMemoryHabitRepository
from habit_tracking.infrastructure.repository_factory import get_habit_repository
from habit_tracking.infrastructure.sql_habit_repository import SqlHabitRepository
from habit_tracking.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def test_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
async def test_db(test_manager):
    async with test_manager.session() as session:
        yield session


@pytest.fixture
def memory_repository():
    return InMemoryHabitRepository()


@pytest.fixture
async def client(test_manager, monkeypatch):
    async def repository_on_test_db():
        async with test_manager.session() as session:
            yield SqlHabitRepository(session)

    app.dependency_overrides[get_habit_repository] = repository_on_test_db
    monkeypatch.setattr(db_module, "db_manager", test_manager)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
