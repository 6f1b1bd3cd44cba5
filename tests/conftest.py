"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The app's service registry and db_manager point at the test engine
    - Environment set before any user_service import reads settings

Design Decisions:
    - SQLite in-memory over PostgreSQL: fast, no external dependency; the
      queries used are portable (RETURNING, unique constraints)
    - StaticPool: one shared connection so every session sees the same memory DB
    - DatabaseSessionManager built via __new__: reuses its rollback/error mapping
      without creating a second engine
"""

import logging
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import user_service.infrastructure.database as db_module  # noqa: E402
import user_service.infrastructure.observability as observability  # noqa: E402
import user_service.models  # noqa: E402,F401
from user_service.db.base import Base  # noqa: E402
from user_service.fixtures.loader import load_fixtures  # noqa: E402
from user_service.fixtures.users import UserFixture  # noqa: E402
from user_service.infrastructure.database import DatabaseSessionManager  # noqa: E402
from user_service.main import app  # noqa: E402
from user_service.services.registry import build_services  # noqa: E402
from user_service.services.user_service import UserService  # noqa: E402


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
def db_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
def user_service(db_manager):
    return UserService(db_manager)


@pytest.fixture
async def seeded(test_session_factory):
    """Load every registered fixture set; returns the fixture user row."""
    await load_fixtures(test_session_factory)
    return UserFixture.data["test_user"]


@pytest.fixture
async def client(db_manager):
    """FastAPI test client wired to the test database."""
    original_manager = db_module.db_manager
    db_module.db_manager = db_manager
    app.state.services = build_services(db_manager)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    del app.state.services
    db_module.db_manager = original_manager


@pytest.fixture
def restore_root_logger(monkeypatch):
    """Undo setup_logging(): root handlers, level and the installed-handler slot."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    monkeypatch.setattr(observability, "_installed_handler", None)
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
