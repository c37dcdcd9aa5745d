"""Field checks shared by the request schemas."""
from core.config import get_settings


def validate_not_blank(value: str | None) -> str | None:
    """Reject strings that are empty after trimming whitespace. None passes through."""
    if value is not None and not value.strip():
        raise ValueError("Value cannot be empty")
    return value


def _check_max_length(value: str | None, limit: int, label: str) -> str | None:
    if value is not None and len(value) > limit:
        raise ValueError(
            f"{label} exceeds maximum length of {limit:,} characters "
            f"(got {len(value):,} characters).",
        )
    return value


def validate_title_length(title: str | None) -> str | None:
    """Bookmark titles are limited by MAX_TITLE_LENGTH."""
    return _check_max_length(title, get_settings().max_title_length, "Title")


def validate_description_length(description: str | None) -> str | None:
    """Bookmark descriptions are limited by MAX_DESCRIPTION_LENGTH."""
    return _check_max_length(
        description, get_settings().max_description_length, "Description",
    )
