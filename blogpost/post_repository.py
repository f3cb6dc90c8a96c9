"""Repository for the post table"""

import logging
from collections.abc import Sequence

from blogpost.database_operations import DatabaseOperations
from blogpost.entities import Column, Post, PostColumns
from blogpost.entity_mapper import EntityMapper
from blogpost.pagination import Paginator
from blogpost.query_builder import QueryBuilder
from blogpost.validation import validate_post

logger = logging.getLogger(__name__)


class PostRepository:
    """CRUD operations for posts.

    Methods run on the connection bound by ``DatabaseManager.connection()``.
    Store failures raise StoreError; a missing row is reported as None or
    False, never as an error.

    Writes validate the post first. When validation fails the method returns
    False, ``post.errors`` says why, and no statement is issued.
    """

    def __init__(self, table_name: str = "post"):
        if not table_name:
            raise ValueError("table_name is required")
        self.table_name = table_name

        self.db_ops = DatabaseOperations()
        self.entity_mapper = EntityMapper(Post)

    def _query(self) -> QueryBuilder:
        return QueryBuilder(self.table_name)

    def _listing(self) -> QueryBuilder:
        """Newest publication first, unpublished posts last"""
        return (
            self._query()
            .order_by_desc(PostColumns.published_at.column, nulls_last=True)
            .order_by_desc(PostColumns.id.column)
        )

    @staticmethod
    def _resolve_columns(columns: Sequence[str | Column] | None) -> list[str]:
        """Check a requested column subset against the post table"""
        if not columns:
            return []
        names = [str(column).strip() for column in columns]
        if names == ["*"]:
            return []

        known = PostColumns.names()
        for name in names:
            if name not in known:
                raise ValueError(f"Unknown post column '{name}'")
        return names

    async def get_all(self) -> list[Post]:
        """Return every post, newest publication first"""
        query, params = self._listing().build()
        rows = await self.db_ops.fetch_all(query, params)
        return self.entity_mapper.map_rows_to_entities(rows)

    async def get_page(self, limit: int, offset: int) -> list[Post]:
        """
        Return one page of posts in listing order

        Args:
            limit: Maximum number of posts, 0 or greater
            offset: Number of posts to skip, 0 or greater

        Raises:
            ValueError: If limit or offset is negative
        """
        query, params = self._listing().limit(limit).offset(offset).build()
        rows = await self.db_ops.fetch_all(query, params)
        return self.entity_mapper.map_rows_to_entities(rows)

    async def get_post_by_id(
        self, post_id: int, columns: Sequence[str | Column] | None = None
    ) -> Post | None:
        """
        Find a post by its id

        Args:
            post_id: The post id
            columns: Optional subset of columns to load, defaults to all of them

        Returns:
            The post, or None if no post has this id
        """
        builder = self._query().select(*self._resolve_columns(columns))
        query, params = builder.where(PostColumns.id.column, post_id).build()

        row = await self.db_ops.fetch_one(query, params)
        if row is None:
            return None
        return self.entity_mapper.map_row_to_entity(row)

    async def get_total(self) -> int:
        """Return the number of posts in the store"""
        query, params = self._query().select("COUNT(*)").build()
        result = await self.db_ops.fetch_value(query, params)
        return result or 0

    async def get_paginated(self, page, per_page: int = 10) -> tuple[list[Post], Paginator]:
        """Return the posts on a 1-based page together with its paginator"""
        paginator = Paginator(page, per_page, await self.get_total())
        posts = await self.get_page(paginator.limit, paginator.offset)
        return posts, paginator

    async def create(self, post: Post) -> bool:
        """
        Insert a new post and assign the store generated id to it

        Returns:
            True if the post was inserted, False if it failed validation

        Raises:
            ValueError: If the post already has an id
        """
        if post.is_persisted:
            raise ValueError(f"Post {post.id} is already persisted")

        if not validate_post(post):
            logger.info("Post rejected on create: %s", [e.value for e in post.errors])
            return False

        post_id = await self.db_ops.fetch_value(
            f"INSERT INTO {self.table_name} (title, content, published_at) "
            "VALUES ($1, $2, $3) RETURNING id",
            [post.title, post.content, post.published_datetime],
        )
        post.id = post_id
        logger.info("Created post %s", post_id)
        return True

    async def update(self, post: Post) -> bool:
        """
        Write the in-memory fields of a post to its row

        A post whose row no longer exists is not an error: zero rows are
        updated and True is returned.

        Returns:
            True if the statement ran, False if the post failed validation

        Raises:
            ValueError: If the post has no id
        """
        if not post.is_persisted:
            raise ValueError("Cannot update a post without an id")

        if not validate_post(post):
            logger.info(
                "Post %s rejected on update: %s", post.id, [e.value for e in post.errors]
            )
            return False

        result = await self.db_ops.execute_query(
            f"UPDATE {self.table_name} "
            "SET title = $2, content = $3, published_at = $4 WHERE id = $1",
            [post.id, post.title, post.content, post.published_datetime],
        )
        logger.info("Updated post %s (%s)", post.id, result)
        return True

    async def delete(self, post: Post) -> bool:
        """
        Delete the row of a post

        Returns:
            True if a row was deleted, False if no row had the post's id

        Raises:
            ValueError: If the post has no id
        """
        if not post.is_persisted:
            raise ValueError("Cannot delete a post without an id")

        result = await self.db_ops.execute_query(
            f"DELETE FROM {self.table_name} WHERE id = $1", [post.id]
        )
        deleted = result != "DELETE 0"
        if deleted:
            logger.info("Deleted post %s", post.id)
        else:
            logger.info("Post %s not found on delete", post.id)
        return deleted
