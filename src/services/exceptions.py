"""Shared exceptions for service layer operations."""
from enum import StrEnum


class ErrorCode(StrEnum):
    """Category of a service failure, used by callers to pick a response."""

    INVALID = "invalid"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    INTERNAL = "internal"


class BookmarkError(Exception):
    """
    Base exception for bookmark service failures.

    Carries an ErrorCode and a human-readable message that is safe to show
    to the end user.
    """

    code: ErrorCode = ErrorCode.INTERNAL

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(BookmarkError):
    """Raised when bookmark fields fail validation."""

    code = ErrorCode.INVALID


class BookmarkNotFoundError(BookmarkError):
    """Raised when a bookmark does not exist or has been removed."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, bookmark_id: str) -> None:
        self.bookmark_id = bookmark_id
        super().__init__(f"Bookmark not found: {bookmark_id}")


class UnauthorizedError(BookmarkError):
    """Raised when the caller is not allowed to perform the operation."""

    code = ErrorCode.UNAUTHORIZED


def error_code(error: BaseException | None) -> str:
    """
    Return the error code for an exception.

    Service errors report their own code. Anything else is an internal error.
    Returns an empty string when there is no error.
    """
    if error is None:
        return ""
    if isinstance(error, BookmarkError):
        return error.code
    return ErrorCode.INTERNAL


def error_message(error: BaseException | None) -> str:
    """
    Return the user-facing message for an exception.

    Only service errors expose their message; unexpected exceptions are
    reduced to a generic text so internals do not leak.
    """
    if error is None:
        return ""
    if isinstance(error, BookmarkError):
        return error.message
    return "Internal error."
