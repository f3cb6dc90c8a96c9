import logging
from typing import Any

import asyncpg

from blogpost.db_context import DatabaseManager
from blogpost.exceptions import NoActiveConnectionError, StoreError

logger = logging.getLogger(__name__)

# Driver failures that mean the statement did not run
_STORE_FAILURES = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


class DatabaseOperations:
    """Statement execution on the connection bound to the current context.

    Driver failures are raised as StoreError. An empty result is never an
    error: fetch_all returns [] and fetch_one returns None.
    """

    @staticmethod
    def get_connection() -> asyncpg.Connection:
        conn = DatabaseManager.get_current_connection()
        if not conn:
            raise NoActiveConnectionError()
        return conn

    async def fetch_all(self, query: str, params: list[Any]) -> list[asyncpg.Record]:
        conn = self.get_connection()
        DatabaseManager.log_query(query, params)
        try:
            return await conn.fetch(query, *params)
        except _STORE_FAILURES as e:
            raise self._store_error(query, e) from e

    async def fetch_one(self, query: str, params: list[Any]) -> asyncpg.Record | None:
        conn = self.get_connection()
        DatabaseManager.log_query(query, params)
        try:
            return await conn.fetchrow(query, *params)
        except _STORE_FAILURES as e:
            raise self._store_error(query, e) from e

    async def fetch_value(self, query: str, params: list[Any]) -> Any:
        conn = self.get_connection()
        DatabaseManager.log_query(query, params)
        try:
            return await conn.fetchval(query, *params)
        except _STORE_FAILURES as e:
            raise self._store_error(query, e) from e

    async def execute_query(self, query: str, params: list[Any]) -> str:
        """Execute a statement and return its status tag, e.g. ``DELETE 1``"""
        conn = self.get_connection()
        DatabaseManager.log_query(query, params)
        try:
            return await conn.execute(query, *params)
        except _STORE_FAILURES as e:
            raise self._store_error(query, e) from e

    @staticmethod
    def _store_error(query: str, error: Exception) -> StoreError:
        logger.error("Store query failed: %s (%s)", query, error)
        return StoreError(f"Server query error: {error}", query=query)
