import asyncio

import pytest

from blogpost.db_context import DatabaseManager
from blogpost.exceptions import NoActiveConnectionError
from blogpost.post_repository import PostRepository
from tests.post_entities import make_post


class TestDatabaseManager:
    @pytest.mark.asyncio
    async def test_get_pool_not_found(self):
        with pytest.raises(ValueError, match="Database pool 'nonexistent' not found"):
            await DatabaseManager.get_pool("nonexistent")

    @pytest.mark.asyncio
    async def test_get_current_connection_no_context(self):
        assert DatabaseManager.get_current_connection() is None

    @pytest.mark.asyncio
    async def test_add_and_remove_pool(self, test_db_pool):
        assert await DatabaseManager.get_pool("test_db") is test_db_pool

        await DatabaseManager.add_pool("alias", test_db_pool)
        assert await DatabaseManager.remove_pool("alias") is test_db_pool
        assert await DatabaseManager.remove_pool("alias") is None

    @pytest.mark.asyncio
    async def test_connection_context_binds_and_resets(self, test_db_pool):
        async with DatabaseManager.connection("test_db") as conn:
            assert DatabaseManager.get_current_connection() is conn

            async with DatabaseManager.connection("test_db") as inner:
                assert inner is conn

        assert DatabaseManager.get_current_connection() is None

    @pytest.mark.asyncio
    async def test_statements_autocommit(self, test_db_pool, post_repo):
        """Writes are visible even when the block later raises"""
        with pytest.raises(RuntimeError):
            async with DatabaseManager.connection("test_db"):
                await post_repo.create(make_post())
                raise RuntimeError("after write")

        async with DatabaseManager.connection("test_db"):
            assert await post_repo.get_total() == 1

    @pytest.mark.asyncio
    async def test_connection_released_after_error(self, test_db_pool):
        with pytest.raises(RuntimeError):
            async with DatabaseManager.connection("test_db"):
                raise RuntimeError("boom")

        assert DatabaseManager.get_current_connection() is None

    @pytest.mark.asyncio
    async def test_connections_released_on_exception(self, test_db_pool):
        """More failing contexts than the pool holds must not exhaust it"""

        async def failing():
            try:
                async with DatabaseManager.connection("test_db"):
                    await asyncio.sleep(0)
                    raise RuntimeError("boom")
            except RuntimeError:
                pass

        await asyncio.wait_for(asyncio.gather(*(failing() for _ in range(20))), timeout=10)


class TestRepositoryWithoutContext:
    @pytest.mark.asyncio
    async def test_all_repository_methods_require_connection_context(self):
        post_repo = PostRepository()
        persisted = make_post()
        persisted.id = 1

        calls = [
            post_repo.get_all(),
            post_repo.get_page(1, 0),
            post_repo.get_post_by_id(1),
            post_repo.get_total(),
            post_repo.create(make_post()),
            post_repo.update(persisted),
            post_repo.delete(persisted),
        ]

        for call in calls:
            with pytest.raises(NoActiveConnectionError, match="No active connection found"):
                await call

    def test_table_name_required(self):
        with pytest.raises(ValueError, match="table_name is required"):
            PostRepository(table_name="")
