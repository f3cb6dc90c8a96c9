from datetime import datetime
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from blogpost.validation import (
    PUBLISHED_AT_FORMAT,
    ValidationErrorKind,
    parse_published_at,
)


T = TypeVar("T")


class Column(Generic[T]):
    """Typed handle for a column of the ``post`` table.

    Usage:
        repo.get_post_by_id(1, [PostColumns.title, PostColumns.content])
    """

    def __init__(self, column_name: str):
        self._column_name = column_name

    @property
    def column(self) -> str:
        """Return the underlying database column name."""
        return self._column_name

    def __str__(self) -> str:
        return self._column_name

    def __repr__(self) -> str:
        return f"Column({self._column_name})"


class PostColumns:
    """Columns of the ``post`` table"""

    id = Column[int]("id")
    title = Column[str]("title")
    content = Column[str]("content")
    published_at = Column[datetime]("published_at")

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return (
            cls.id.column,
            cls.title.column,
            cls.content.column,
            cls.published_at.column,
        )


class Post(BaseModel):
    """A piece of writing for publication.

    ``id`` is assigned once, by the store, and cannot be changed afterwards.
    ``published_at`` holds the ``YYYY-MM-DD HH:MM:SS`` text of the publication
    time, or None when the post is not published yet. An empty string is
    normalised to None so it never reaches the store.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(validate_assignment=True)

    id: int | None = None
    title: str = ""
    content: str = ""
    published_at: str | None = None
    errors: list[ValidationErrorKind] = Field(default_factory=list, exclude=True)

    def __setattr__(self, name: str, value: Any):
        # The store assigns the id once; later writes may only repeat it
        if name == "id" and self.id is not None and value != self.id:
            raise ValueError(f"Post id {self.id} cannot be changed")
        super().__setattr__(name, value)

    @field_validator("published_at", mode="before")
    @classmethod
    def _normalise_published_at(cls, value: Any) -> Any:
        if value == "":
            return None
        if isinstance(value, datetime):
            return value.strftime(PUBLISHED_AT_FORMAT)
        return value

    @property
    def published_datetime(self) -> datetime | None:
        """Publication time as a datetime, None if unpublished"""
        return parse_published_at(self.published_at)

    @property
    def is_persisted(self) -> bool:
        return self.id is not None
