"""Shared test fixtures."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from watchdeck.database import enable_sqlite_foreign_keys
from watchdeck.identity import Identity
from watchdeck.models.base import Base
from watchdeck.models.user import (
    USER_TYPE_SUPER_ADMIN,
    USER_TYPE_ZABBIX_USER,
    User,
    UserGroup,
)

ADMIN_ID = 1
GUEST_ID = 2
OPERATOR_ID = 3

ADMINS_GROUP_ID = 1
GUESTS_GROUP_ID = 2


@pytest_asyncio.fixture
async def engine():
    """In-memory database with seeded users and user groups."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_sessionmaker(engine)() as session:
        session.add_all([
            User(id=ADMIN_ID, alias="Admin", type=USER_TYPE_SUPER_ADMIN),
            User(id=GUEST_ID, alias="guest", type=USER_TYPE_ZABBIX_USER),
            User(id=OPERATOR_ID, alias="operator", type=USER_TYPE_ZABBIX_USER),
            UserGroup(id=ADMINS_GROUP_ID, name="Zabbix administrators"),
            UserGroup(id=GUESTS_GROUP_ID, name="Guests"),
        ])
        await session.commit()

    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def admin_identity():
    return Identity(userid=ADMIN_ID, user_type=USER_TYPE_SUPER_ADMIN)


@pytest.fixture
def guest_identity():
    return Identity(userid=GUEST_ID, user_type=USER_TYPE_ZABBIX_USER)
