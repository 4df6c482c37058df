"""Pydantic schemas and field validation for bookmarks."""
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from core.config import get_settings
from services.exceptions import InvalidInputError


class BookmarkFields(Protocol):
    """Fields inspected by validate_bookmark (ORM model or schema)."""

    user_id: str
    title: str
    url: str
    description: str | None


def _check_length(label: str, value: str, max_length: int) -> None:
    if len(value) > max_length:
        raise InvalidInputError(
            f"{label} exceeds maximum length of {max_length:,} characters "
            f"(got {len(value):,} characters).",
        )


def validate_bookmark(bookmark: BookmarkFields) -> None:
    """
    Validate bookmark fields, failing on the first violation.

    Checks, in order: owner present, title present, title length, URL present,
    URL length, description length (only when a description is set).

    Args:
        bookmark: Any object exposing user_id, title, url and description.

    Raises:
        InvalidInputError: Describing the first constraint that is violated.
    """
    settings = get_settings()

    if not bookmark.user_id:
        raise InvalidInputError("User ID is required.")

    if not bookmark.title:
        raise InvalidInputError("Title is required.")
    _check_length("Title", bookmark.title, settings.max_title_length)

    if not bookmark.url:
        raise InvalidInputError("URL is required.")
    _check_length("URL", bookmark.url, settings.max_url_length)

    if bookmark.description:
        _check_length("Description", bookmark.description, settings.max_description_length)


class BookmarkCreate(BaseModel):
    """
    Schema for creating a new bookmark.

    Field values are not constrained here; the service runs validate_bookmark
    so that every failure surfaces as an InvalidInputError.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(default="", alias="users_id")
    title: str = ""
    url: str = ""
    description: str = ""
    html: str = ""


class BookmarkUpdate(BaseModel):
    """
    Schema for updating an existing bookmark.

    A field that is omitted or None is left unchanged. An empty string is a
    real value: for description and html it clears the field.
    """

    title: str | None = None
    url: str | None = None
    description: str | None = None
    html: str | None = None

    def changes(self) -> dict[str, str]:
        """Return only the fields the caller actually provided a value for."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class BookmarkFilter(BaseModel):
    """Schema for filtering bookmark listings. A limit of 0 means no limit."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    user_id: str | None = Field(default=None, alias="users_id")
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=0, ge=0)


class BookmarkResponse(BaseModel):
    """
    Schema for full bookmark records.

    Serialize with by_alias=True to get the `users_id` field name.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str = Field(alias="users_id")
    title: str
    url: str
    description: str
    html: str
    created_at: int
    updated_at: int
    removed_at: int = 0

    def to_record(self) -> dict[str, Any]:
        """Serialize to a plain dict with the external field names."""
        return self.model_dump(by_alias=True)


class BookmarkListResponse(BaseModel):
    """Schema for paginated bookmark listings."""

    items: list[BookmarkResponse]
    total: int  # Total count of bookmarks matching the filter (before pagination)
    offset: int  # Current pagination offset
    limit: int  # Current pagination limit (0 = unlimited)
    has_more: bool  # True if there are more results beyond this page

    @classmethod
    def from_page(
        cls,
        items: list[Any],
        total: int,
        bookmark_filter: BookmarkFilter,
    ) -> "BookmarkListResponse":
        """
        Build a listing response from one page returned by find_bookmarks.

        Args:
            items: Bookmarks on this page (ORM objects or response models).
            total: Total matching bookmarks before pagination.
            bookmark_filter: The filter the page was fetched with.
        """
        responses = [BookmarkResponse.model_validate(item) for item in items]
        return cls(
            items=responses,
            total=total,
            offset=bookmark_filter.offset,
            limit=bookmark_filter.limit,
            has_more=bookmark_filter.offset + len(responses) < total,
        )
