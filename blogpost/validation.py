"""Validation of post data before it is written to the store"""

import re
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blogpost.entities import Post

PUBLISHED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"

# strptime alone accepts single digit fields such as "2024-1-5 1:2:3"
_PUBLISHED_AT_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")


class ValidationErrorKind(str, Enum):
    TITLE_REQUIRED = "Title is required"
    CONTENT_REQUIRED = "Content is required"
    INVALID_PUBLISHED_AT = "Invalid date and time"


def parse_published_at(value: str | None) -> datetime | None:
    """Parse a publication timestamp in the exact ``YYYY-MM-DD HH:MM:SS`` form.

    Args:
        value: Timestamp text, or None / empty string for "not published"

    Returns:
        The parsed datetime, or None when no timestamp was given

    Raises:
        ValueError: If the text has the wrong shape or names an impossible
            date or time (month 13, day 32, February 30, hour 99, ...)
    """
    if value is None or value == "":
        return None
    if not _PUBLISHED_AT_PATTERN.fullmatch(value):
        raise ValueError(f"Published at must match YYYY-MM-DD HH:MM:SS, got {value!r}")
    return datetime.strptime(value, PUBLISHED_AT_FORMAT)


def validate_post(post: "Post") -> bool:
    """Check the in-memory fields of a post.

    The error list is cleared first and then filled in the order problems are
    found. Nothing is read from or written to the store.

    Returns:
        True if the post may be persisted
    """
    post.errors = []

    if post.title == "":
        post.errors.append(ValidationErrorKind.TITLE_REQUIRED)
    if post.content == "":
        post.errors.append(ValidationErrorKind.CONTENT_REQUIRED)
    if post.published_at:
        try:
            parse_published_at(post.published_at)
        except ValueError:
            post.errors.append(ValidationErrorKind.INVALID_PUBLISHED_AT)

    return not post.errors
