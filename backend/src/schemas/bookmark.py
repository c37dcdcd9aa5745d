"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, HttpUrl, field_validator

from schemas.validators import (
    validate_description_length,
    validate_not_blank,
    validate_title_length,
)


class BookmarkCreate(BaseModel):
    """
    Schema for creating a new bookmark.

    There is no owner field: the owner is always the authenticated caller.
    """

    # HttpUrl normalizes root domains with trailing slash (example.com -> example.com/)
    # but preserves paths as-is (example.com/page stays example.com/page)
    title: str
    link: HttpUrl
    description: str | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        """Validate title is present and within length."""
        return validate_title_length(validate_not_blank(v))

    @field_validator("description")
    @classmethod
    def check_description_length(cls, v: str | None) -> str | None:
        """Validate description length."""
        return validate_description_length(v)


class BookmarkUpdate(BaseModel):
    """
    Schema for partially updating an existing bookmark.

    Only fields present in the request body are applied. `title` and `link` may be
    omitted but not set to null; `description` may be cleared with null.
    """

    title: str | None = None
    link: HttpUrl | None = None
    description: str | None = None

    @field_validator("title", "link")
    @classmethod
    def check_not_null(cls, v: object) -> object:
        """Reject explicit nulls for required columns."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        """Validate title is present and within length."""
        return validate_title_length(validate_not_blank(v))

    @field_validator("description")
    @classmethod
    def check_description_length(cls, v: str | None) -> str | None:
        """Validate description length."""
        return validate_description_length(v)


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    link: str
    description: str | None
    created_at: datetime
    updated_at: datetime
