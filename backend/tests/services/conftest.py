"""Service test fixtures - a throwaway games store and an HTTP client over it.

Invariants:
    - Every test gets a fresh in-memory SQLite database (StaticPool: all
      sessions share the one connection, so they see each other's commits)
    - The app's own db_manager is swapped for one bound to that database;
      routes go through the real get_db dependency
    - edit_game writes an aggregate straight to the store, bypassing the
      round rules, to arrange test scenarios
"""

import random

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

import punchlines.infrastructure.database as db_module
import punchlines.models  # noqa: F401
from punchlines.core.domain_types import GameCode
from punchlines.db.base import Base
from punchlines.infrastructure.database import DatabaseSessionManager
from punchlines.main import app
from punchlines.services.game_repository import SqlGameRepository
from punchlines.services.game_service import create_game


@pytest.fixture
async def test_manager(monkeypatch):
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    manager = DatabaseSessionManager.from_engine(engine)
    monkeypatch.setattr(db_module, "db_manager", manager)
    yield manager
    await manager.dispose()


@pytest.fixture
def open_session(test_manager):
    """Callable opening an independent session on the test store."""
    return test_manager.session


@pytest.fixture
async def test_db(open_session):
    async with open_session() as session:
        yield session


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
async def game_code(test_db, rng) -> GameCode:
    return await create_game(test_db, rng=rng)


@pytest.fixture
def edit_game(open_session):
    """Load a game in its own session, apply fn(game), save, commit."""
    async def _edit(code, fn):
        async with open_session() as session:
            repo = SqlGameRepository(session)
            game = await repo.get(code)
            fn(game)
            await repo.save(game)
            await session.commit()
            return game
    return _edit


@pytest.fixture
def load_game(open_session):
    async def _load(code):
        async with open_session() as session:
            return await SqlGameRepository(session).get(code)
    return _load


@pytest.fixture
async def client(test_manager):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
