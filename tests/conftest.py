import asyncpg
import pytest
import pytest_asyncio
from testcontainers.postgres import PostgresContainer

from blogpost.db_context import DatabaseManager
from blogpost.post_repository import PostRepository
from blogpost.schema import create_schema


@pytest.fixture(scope="session")
def postgres_container():
    """Start a PostgreSQL test container for the session."""
    with PostgresContainer("postgres:17") as postgres:
        yield postgres


@pytest.fixture
def postgres_dsn(postgres_container):
    host = postgres_container.get_container_host_ip()
    port = postgres_container.get_exposed_port(5432)
    return f"postgresql://{postgres_container.username}:{postgres_container.password}@{host}:{port}/{postgres_container.dbname}"


@pytest_asyncio.fixture
async def test_db_pool(postgres_dsn):
    """Create a pool with an empty post table, registered as "test_db"."""
    # A new pool per test avoids event loop issues
    pool = await asyncpg.create_pool(postgres_dsn, min_size=1, max_size=5)

    await DatabaseManager.add_pool("test_db", pool)
    await create_schema("test_db")

    yield pool

    async with pool.acquire() as conn:
        await conn.execute("TRUNCATE TABLE post RESTART IDENTITY;")

    await DatabaseManager.remove_pool("test_db")
    await pool.close()


@pytest.fixture
def post_repo():
    return PostRepository()
