"""
Service layer for bookmark CRUD operations.

BookmarkService defines the contract any storage backend implements.
SqlBookmarkService is the SQLAlchemy implementation used by the application.

All operations take the database session and the caller explicitly. They raise:
- BookmarkNotFoundError if the bookmark does not exist or has been removed.
- UnauthorizedError if the caller may not perform the operation.
- InvalidInputError if the resulting bookmark fails validation.

Note: Services do not commit. The session generator commits at request end.
"""
import logging
from abc import ABC, abstractmethod

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.policy import AuthorizationPolicy
from models.base import epoch_now
from models.bookmark import Bookmark
from schemas.bookmark import (
    BookmarkCreate,
    BookmarkFilter,
    BookmarkUpdate,
    validate_bookmark,
)
from schemas.caller import Caller, caller_id
from services.authorization import (
    can_create_bookmark,
    can_find_bookmark,
    can_remove_bookmark,
    can_update_bookmark,
    can_view_bookmark,
)
from services.exceptions import BookmarkNotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)


class BookmarkService(ABC):
    """Contract for managing bookmarks, independent of the storage backend."""

    @abstractmethod
    async def find_bookmark_by_id(
        self,
        db: AsyncSession,
        caller: Caller | None,
        bookmark_id: str,
    ) -> Bookmark:
        """Return an active bookmark owned by the caller."""
        ...

    @abstractmethod
    async def find_bookmarks(
        self,
        db: AsyncSession,
        caller: Caller | None,
        bookmark_filter: BookmarkFilter,
    ) -> tuple[list[Bookmark], int]:
        """Return one page of matching bookmarks and the total match count."""
        ...

    @abstractmethod
    async def create_bookmark(
        self,
        db: AsyncSession,
        caller: Caller | None,
        data: BookmarkCreate,
    ) -> Bookmark:
        """Validate and store a new bookmark; the backend assigns id and timestamps."""
        ...

    @abstractmethod
    async def update_bookmark(
        self,
        db: AsyncSession,
        caller: Caller | None,
        bookmark_id: str,
        data: BookmarkUpdate,
    ) -> Bookmark:
        """Apply the provided fields to a bookmark and return the result."""
        ...

    @abstractmethod
    async def remove_bookmark(
        self,
        db: AsyncSession,
        caller: Caller | None,
        bookmark_id: str,
        permanent: bool = False,
    ) -> None:
        """Remove a bookmark (soft by default, permanently if requested)."""
        ...


class SqlBookmarkService(BookmarkService):
    """
    SQLAlchemy-backed bookmark service.

    Removal is a soft delete that sets removed_at; removed bookmarks are
    invisible to every find operation. Listings are ordered by created_at,
    then id, oldest first.
    """

    def __init__(self, policy: AuthorizationPolicy | None = None) -> None:
        self._policy = policy

    @property
    def policy(self) -> AuthorizationPolicy:
        """Explicit policy if one was given, otherwise the one from current settings."""
        if self._policy is not None:
            return self._policy
        return AuthorizationPolicy.from_settings()

    async def _get(
        self,
        db: AsyncSession,
        bookmark_id: str,
        include_removed: bool = False,
    ) -> Bookmark | None:
        """Get a bookmark by ID regardless of owner."""
        query = select(Bookmark).where(Bookmark.id == bookmark_id)
        if not include_removed:
            query = query.where(Bookmark.removed_at == 0)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def find_bookmark_by_id(
        self,
        db: AsyncSession,
        caller: Caller | None,
        bookmark_id: str,
    ) -> Bookmark:
        """
        Get an active bookmark by ID.

        Raises:
            BookmarkNotFoundError: If no active bookmark has this ID.
            UnauthorizedError: If the caller does not own the bookmark.
        """
        bookmark = await self._get(db, bookmark_id)
        if bookmark is None:
            raise BookmarkNotFoundError(bookmark_id)
        if not can_view_bookmark(caller, bookmark):
            logger.info(
                "Denied read of bookmark %s for user %r", bookmark_id, caller_id(caller),
            )
            raise UnauthorizedError("You are not allowed to view this bookmark.")
        return bookmark

    async def find_bookmarks(
        self,
        db: AsyncSession,
        caller: Caller | None,
        bookmark_filter: BookmarkFilter,
    ) -> tuple[list[Bookmark], int]:
        """
        List active bookmarks matching the filter with pagination.

        Args:
            db: Database session.
            caller: The requesting user.
            bookmark_filter: Must be scoped to the caller's user ID.

        Returns:
            Tuple of (list of bookmarks, total count before pagination).

        Raises:
            UnauthorizedError: If the filter is not scoped to the caller.
        """
        if not can_find_bookmark(caller, bookmark_filter):
            logger.info(
                "Denied bookmark listing for user %r (filter owner %r)",
                caller_id(caller),
                bookmark_filter.user_id,
            )
            raise UnauthorizedError("You can only list your own bookmarks.")

        base_query = select(Bookmark).where(
            Bookmark.user_id == bookmark_filter.user_id,
            Bookmark.removed_at == 0,
        )
        if bookmark_filter.id is not None:
            base_query = base_query.where(Bookmark.id == bookmark_filter.id)

        # Get total count before pagination
        count_query = select(func.count()).select_from(base_query.subquery())
        total_result = await db.execute(count_query)
        total = total_result.scalar() or 0

        base_query = base_query.order_by(Bookmark.created_at.asc(), Bookmark.id.asc())
        if bookmark_filter.offset:
            base_query = base_query.offset(bookmark_filter.offset)
        if bookmark_filter.limit:
            base_query = base_query.limit(bookmark_filter.limit)

        result = await db.execute(base_query)
        return list(result.scalars().all()), total

    async def create_bookmark(
        self,
        db: AsyncSession,
        caller: Caller | None,
        data: BookmarkCreate,
    ) -> Bookmark:
        """
        Create a new bookmark.

        Ownership is checked before the fields, so only the owner learns why
        a bookmark is invalid.

        Raises:
            UnauthorizedError: If the bookmark is not owned by the caller, or
                the caller is restricted by policy.
            InvalidInputError: If the fields fail validation.
        """
        if not can_create_bookmark(caller, data, self.policy):
            logger.info(
                "Denied bookmark creation for user %r (owner %r)",
                caller_id(caller),
                data.user_id,
            )
            raise UnauthorizedError("You are not allowed to create this bookmark.")
        validate_bookmark(data)

        now = epoch_now()
        bookmark = Bookmark(
            user_id=data.user_id,
            title=data.title,
            url=data.url,
            description=data.description,
            html=data.html,
            created_at=now,
            updated_at=now,
            removed_at=0,
        )
        db.add(bookmark)
        await db.flush()
        await db.refresh(bookmark)
        return bookmark

    async def update_bookmark(
        self,
        db: AsyncSession,
        caller: Caller | None,
        bookmark_id: str,
        data: BookmarkUpdate,
    ) -> Bookmark:
        """
        Update the provided fields of a bookmark.

        Fields left unset (or None) in `data` are unchanged. The merged result
        is validated before anything is written.

        Raises:
            BookmarkNotFoundError: If no active bookmark has this ID.
            UnauthorizedError: If the caller may not update the bookmark.
            InvalidInputError: If the updated fields fail validation.
        """
        bookmark = await self._get(db, bookmark_id)
        if bookmark is None:
            raise BookmarkNotFoundError(bookmark_id)
        if not can_update_bookmark(caller, bookmark, self.policy):
            logger.info(
                "Denied update of bookmark %s for user %r", bookmark_id, caller_id(caller),
            )
            raise UnauthorizedError("You are not allowed to update this bookmark.")

        changes = data.changes()
        merged = BookmarkCreate(
            user_id=bookmark.user_id,
            title=changes.get("title", bookmark.title),
            url=changes.get("url", bookmark.url),
            description=changes.get("description", bookmark.description),
            html=changes.get("html", bookmark.html),
        )
        validate_bookmark(merged)

        for field, value in changes.items():
            setattr(bookmark, field, value)
        bookmark.updated_at = epoch_now()

        await db.flush()
        await db.refresh(bookmark)
        return bookmark

    async def remove_bookmark(
        self,
        db: AsyncSession,
        caller: Caller | None,
        bookmark_id: str,
        permanent: bool = False,
    ) -> None:
        """
        Remove a bookmark.

        A soft removal sets removed_at. A permanent removal deletes the row,
        and also applies to bookmarks that were already soft-removed.

        Raises:
            BookmarkNotFoundError: If the bookmark does not exist (or is
                already removed, for a soft removal).
            UnauthorizedError: If the caller may not remove the bookmark.
        """
        bookmark = await self._get(db, bookmark_id, include_removed=permanent)
        if bookmark is None:
            raise BookmarkNotFoundError(bookmark_id)
        if not can_remove_bookmark(caller, bookmark, self.policy):
            logger.info(
                "Denied removal of bookmark %s for user %r", bookmark_id, caller_id(caller),
            )
            raise UnauthorizedError("You are not allowed to remove this bookmark.")

        owner_id = bookmark.user_id
        if permanent:
            await db.delete(bookmark)
        else:
            bookmark.removed_at = epoch_now()
        await db.flush()
        logger.info(
            "Removed bookmark %s (permanent=%s) for user %s",
            bookmark_id,
            permanent,
            owner_id,
        )


bookmark_service = SqlBookmarkService()
