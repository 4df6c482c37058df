"""
Ownership checks for bookmark operations.

Every check takes the caller explicitly and returns a bool. Turning a False
into an UnauthorizedError is left to the service that calls it.
"""
from core.policy import AuthorizationPolicy
from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkFilter
from schemas.caller import Caller, caller_id

DEFAULT_POLICY = AuthorizationPolicy()


def _is_restricted(caller: Caller | None, policy: AuthorizationPolicy) -> bool:
    """True if the policy bars this caller from mutating anything."""
    return caller is not None and caller.is_demo and policy.demo_users_read_only


def can_find_bookmark(caller: Caller | None, bookmark_filter: BookmarkFilter) -> bool:
    """
    Return True if the caller may list bookmarks with the given filter.

    Callers may only list their own bookmarks, so the filter must be scoped
    to the caller's user ID. A filter without an owner is rejected.
    """
    user_id = caller_id(caller)
    return user_id != "" and bookmark_filter.user_id == user_id


def can_view_bookmark(caller: Caller | None, bookmark: Bookmark) -> bool:
    """Return True if the caller owns the bookmark. Demo accounts may read."""
    user_id = caller_id(caller)
    return user_id != "" and bookmark.user_id == user_id


def can_create_bookmark(
    caller: Caller | None,
    data: BookmarkCreate,
    policy: AuthorizationPolicy = DEFAULT_POLICY,
) -> bool:
    """Return True if the caller may create a bookmark owned by data.user_id."""
    if _is_restricted(caller, policy):
        return False
    user_id = caller_id(caller)
    return user_id != "" and data.user_id == user_id


def can_update_bookmark(
    caller: Caller | None,
    bookmark: Bookmark,
    policy: AuthorizationPolicy = DEFAULT_POLICY,
) -> bool:
    """
    Return True if the caller may update the bookmark.

    Restricted (demo) callers are always refused. Everyone else must own the
    bookmark.
    """
    if _is_restricted(caller, policy):
        return False
    return can_view_bookmark(caller, bookmark)


# Removal is a mutation like any other and shares the update rule.
can_remove_bookmark = can_update_bookmark
