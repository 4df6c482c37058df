"""Service layer for bookmark owners and caller identity lookup."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.caller import Caller


async def create_user(
    db: AsyncSession,
    email: str | None = None,
    is_demo: bool = False,
) -> User:
    """
    Create a user.

    Note: Uses flush(), not commit. Session generator handles commit at request end.
    """
    user = User(email=email, is_demo=is_demo)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def get_user(db: AsyncSession, user_id: str) -> User | None:
    """Get a user by ID."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_caller(db: AsyncSession, user_id: str) -> Caller | None:
    """
    Resolve an authenticated user ID to the Caller used by authorization checks.

    Returns None for an empty or unknown ID, which the checks treat as an
    unauthenticated caller.
    """
    if not user_id:
        return None
    user = await get_user(db, user_id)
    if user is None:
        return None
    return Caller(id=user.id, is_demo=user.is_demo)
