"""Blog post store built on asyncpg"""

from blogpost.auth import is_logged_in
from blogpost.db_context import DatabaseManager
from blogpost.entities import Post, PostColumns
from blogpost.exceptions import NoActiveConnectionError, StoreError
from blogpost.pagination import Paginator
from blogpost.post_repository import PostRepository
from blogpost.validation import ValidationErrorKind, validate_post

__all__ = [
    "DatabaseManager",
    "NoActiveConnectionError",
    "Paginator",
    "Post",
    "PostColumns",
    "PostRepository",
    "StoreError",
    "ValidationErrorKind",
    "is_logged_in",
    "validate_post",
]
