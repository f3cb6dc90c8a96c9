"""
Database setup utilities for examples
"""

import sys
from pathlib import Path

# Add the parent directory to Python path so we can import blogpost
sys.path.append(str(Path(__file__).parent.parent))

from blogpost.config import DatabaseConfig, configure_logging, create_pool
from blogpost.db_context import DatabaseManager
from blogpost.schema import create_schema


async def setup_postgres_connection(pool_name: str = "default"):
    """
    Connect to the PostgreSQL instance described by the BLOGPOST_DB_* variables
    (or a .env file) and create the post table.

    Defaults: postgres:postgres@localhost:5432/blog
    """
    configure_logging()
    config = DatabaseConfig.from_env().model_copy(update={"pool_name": pool_name})
    try:
        pool = await create_pool(config)
    except OSError as e:
        print(f"Failed to connect to PostgreSQL at {config.host}:{config.port}: {e}")
        raise

    await create_schema(pool_name)
    print(f"Connected to {config.host}:{config.port}/{config.database}, post table ready")
    return pool


async def cleanup_example_data(pool_name: str = "default"):
    pool = await DatabaseManager.get_pool(pool_name)
    async with pool.acquire() as conn:
        await conn.execute("TRUNCATE TABLE post RESTART IDENTITY;")
    print("Cleaned up existing posts")


async def close_connections(pool_name: str = "default"):
    pool = await DatabaseManager.remove_pool(pool_name)
    if pool:
        await pool.close()
