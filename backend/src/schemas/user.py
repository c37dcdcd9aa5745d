"""Pydantic schemas for authentication and user profile endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from schemas.validators import validate_not_blank


class AuthRequest(BaseModel):
    """Credentials submitted to signup and signin."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=1024)


class UserUpdate(BaseModel):
    """Schema for editing the current user's profile. All fields optional."""

    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def check_email_not_null(cls, v: str | None) -> str:
        """Email can be changed but not removed."""
        if v is None:
            raise ValueError("Email cannot be null")
        return v

    @field_validator("first_name", "last_name")
    @classmethod
    def check_names(cls, v: str | None) -> str | None:
        """Names may be cleared with null but not set to blank strings."""
        return validate_not_blank(v)


class UserResponse(BaseModel):
    """
    Sanitized user record.

    The password digest is never included.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
    updated_at: datetime
