"""DDL for the post table"""

from blogpost.db_context import DatabaseManager

POST_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS post (
    id SERIAL PRIMARY KEY,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    published_at TIMESTAMP NULL
);
"""


async def create_schema(pool_name: str = "default"):
    """Create the post table if it does not exist"""
    pool = await DatabaseManager.get_pool(pool_name)
    async with pool.acquire() as conn:
        await conn.execute(POST_TABLE_DDL)

