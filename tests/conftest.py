"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Must be set before any app imports that trigger Settings validation.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from core.config import get_settings  # noqa: E402
from models.base import Base  # noqa: E402
from models.user import User  # noqa: E402
from schemas.caller import Caller  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def clear_settings_cache() -> None:
    """Make every test read settings fresh from the environment."""
    get_settings.cache_clear()


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Create an engine over a fresh in-memory database.

    StaticPool keeps a single connection so the schema created here is the
    one every session in the test sees. Each test gets its own database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create an async session bound to the test database."""
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a regular test user."""
    user = User(email="owner@example.com")
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """Create a second user who does not own the test bookmarks."""
    user = User(email="other@example.com")
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def demo_user(db_session: AsyncSession) -> User:
    """Create a read-only demo user."""
    user = User(email="demo@example.com", is_demo=True)
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
def caller(test_user: User) -> Caller:
    """Caller identity for test_user."""
    return Caller(id=test_user.id)


@pytest.fixture
def other_caller(other_user: User) -> Caller:
    """Caller identity for other_user."""
    return Caller(id=other_user.id)


@pytest.fixture
def demo_caller(demo_user: User) -> Caller:
    """Caller identity for demo_user."""
    return Caller(id=demo_user.id, is_demo=True)
