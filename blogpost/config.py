"""Connection and logging configuration read from the environment"""

import logging
import os
from typing import Any
from urllib.parse import quote

import asyncpg
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from blogpost.db_context import DatabaseManager

logger = logging.getLogger(__name__)

ENV_PREFIX = "BLOGPOST_"


class DatabaseConfig(BaseModel):
    """Settings for the PostgreSQL connection pool"""

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="blog", description="Database name")
    user: str = Field(default="postgres", description="Database user")
    password: str = Field(default="postgres", description="Database password")
    dsn: str | None = Field(default=None, description="Full DSN, overrides the parts above")
    min_size: int = Field(default=1, ge=0)
    max_size: int = Field(default=10, ge=1)
    pool_name: str = Field(default="default", description="Name the pool is registered under")

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "DatabaseConfig":
        """Build the config from ``BLOGPOST_DB_*`` variables (and a .env file)"""
        if load_dotenv_file:
            load_dotenv()

        values = {}
        for name in cls.model_fields:
            env_value = os.getenv(f"{ENV_PREFIX}DB_{name.upper()}")
            if env_value is not None:
                values[name] = env_value
        return cls(**values)

    def to_dsn(self) -> str:
        if self.dsn:
            return self.dsn
        user = quote(self.user, safe="")
        password = quote(self.password, safe="")
        database = quote(self.database, safe="")
        return f"postgresql://{user}:{password}@{self.host}:{self.port}/{database}"

    def connect_kwargs(self) -> dict[str, Any]:
        """Connection arguments for asyncpg, passed unencoded unless a DSN is set"""
        if self.dsn:
            return {"dsn": self.dsn}
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "database": self.database,
        }


def configure_logging(level: str | int | None = None):
    """Set up root logging; the level defaults to ``BLOGPOST_LOG_LEVEL`` or INFO"""
    if level is None:
        level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def create_pool(config: DatabaseConfig) -> asyncpg.Pool:
    """Create a connection pool and register it with the DatabaseManager"""
    pool = await asyncpg.create_pool(
        **config.connect_kwargs(), min_size=config.min_size, max_size=config.max_size
    )
    await DatabaseManager.add_pool(config.pool_name, pool)
    logger.info("Connected to %s:%s/%s", config.host, config.port, config.database)
    return pool
