"""Tests for the unit-of-work session generator."""
import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import db.session
from db.session import get_async_session
from models.user import User


@pytest.fixture
def session_factory(
    async_engine: AsyncEngine, monkeypatch: pytest.MonkeyPatch,
) -> async_sessionmaker:
    """Point get_async_session at the test database."""
    factory = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(db.session, "async_session_factory", factory)
    return factory


async def find_user(factory: async_sessionmaker, email: str) -> User | None:
    """Look up a user by email in a fresh session."""
    async with factory() as session:
        result = await session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()


async def test__get_async_session__commits_on_normal_exit(
    session_factory: async_sessionmaker,
) -> None:
    sessions = get_async_session()
    session = await sessions.__anext__()
    session.add(User(email="kept@example.com"))
    await session.flush()

    with pytest.raises(StopAsyncIteration):
        await sessions.__anext__()

    assert await find_user(session_factory, "kept@example.com") is not None


async def test__get_async_session__rolls_back_on_error(
    session_factory: async_sessionmaker,
) -> None:
    sessions = get_async_session()
    session = await sessions.__anext__()
    session.add(User(email="dropped@example.com"))
    await session.flush()

    with pytest.raises(RuntimeError, match="request failed"):
        await sessions.athrow(RuntimeError("request failed"))

    assert await find_user(session_factory, "dropped@example.com") is None
