"""Integration test fixtures: in-memory app, async client, bearer tokens."""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Force test config BEFORE any app imports
os.environ["DEBUG"] = "true"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-for-integration-tests"

import watchdeck.database as db_mod
import watchdeck.dependencies as dep_mod
from watchdeck.utils.security import create_access_token

SECRET_KEY = os.environ["SECRET_KEY"]


def _reset_singletons():
    """Reset all module-level singletons so each test session starts clean."""
    db_mod._engine = None
    db_mod._session_factory = None
    dep_mod._config_instance = None
    dep_mod._condition_validator = None


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def test_app():
    """Create test app with in-memory database (shared via StaticPool)."""
    _reset_singletons()

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db_mod.enable_sqlite_foreign_keys(engine)

    # Inject into database module BEFORE app import
    db_mod._engine = engine
    factory = async_sessionmaker(engine, expire_on_commit=False)
    db_mod._session_factory = factory

    dep_mod.get_app_config()

    from watchdeck.main import app
    from watchdeck.models.base import Base
    from watchdeck.models.user import (
        USER_TYPE_SUPER_ADMIN,
        USER_TYPE_ZABBIX_USER,
        User,
        UserGroup,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with factory() as session:
        session.add_all([
            User(id=1, alias="Admin", type=USER_TYPE_SUPER_ADMIN),
            User(id=2, alias="guest", type=USER_TYPE_ZABBIX_USER),
            UserGroup(id=1, name="Zabbix administrators"),
        ])
        await session.commit()

    yield app

    await engine.dispose()
    _reset_singletons()


@pytest_asyncio.fixture(loop_scope="session")
async def client(test_app):
    """Async HTTP client for testing."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def _headers(userid: int) -> dict:
    token = create_access_token({"sub": str(userid)}, SECRET_KEY)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return _headers(1)


@pytest.fixture
def guest_headers():
    return _headers(2)
