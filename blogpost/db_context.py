import logging
import traceback
from contextlib import asynccontextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import asyncpg

logger = logging.getLogger(__name__)

# Connection bound to the current request or task
_current_connection: ContextVar[asyncpg.Connection | None] = ContextVar(
    "current_connection", default=None
)
_query_tracker: ContextVar["QueryTracker | None"] = ContextVar(
    "query_tracker", default=None
)
_db_pools: dict[str, asyncpg.Pool] = {}


@dataclass
class QueryLog:
    """A statement executed against the store, with the call site that issued it"""

    query: str
    params: list[Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    stack_trace: str | None = None


class QueryTracker:
    """Records the statements a request sends to the store.

    Recording only happens while the tracker is enabled, so an outer block can
    keep a tracker around and switch it on for the part it cares about.
    """

    def __init__(self):
        self.queries: list[QueryLog] = []
        self.enabled: bool = False

    def record(self, query: str, params: list[Any], stack_trace: str | None = None):
        if self.enabled:
            self.queries.append(
                QueryLog(query=query, params=list(params), stack_trace=stack_trace)
            )

    def get_queries(self) -> list[QueryLog]:
        return self.queries.copy()

    def statements(self) -> list[str]:
        """SQL text of the recorded statements, oldest first"""
        return [log.query for log in self.queries]

    def clear(self):
        self.queries.clear()

    def count(self) -> int:
        return len(self.queries)


class DatabaseManager:
    """Named pool registry and the connection bound to the current context.

    Repository calls never open transactions themselves: every statement runs
    in autocommit mode on the connection bound by ``connection()``.
    """

    @classmethod
    async def add_pool(cls, name: str, pool: asyncpg.Pool):
        """Register a pool under a name, replacing any previous one"""
        _db_pools[name] = pool
        logger.debug("Registered database pool %r", name)

    @classmethod
    async def get_pool(cls, name: str = "default") -> asyncpg.Pool:
        if name not in _db_pools:
            raise ValueError(f"Database pool '{name}' not found")
        return _db_pools[name]

    @classmethod
    async def remove_pool(cls, name: str) -> asyncpg.Pool | None:
        """Unregister a pool and return it so the caller can close it"""
        return _db_pools.pop(name, None)

    @classmethod
    def get_current_connection(cls) -> asyncpg.Connection | None:
        return _current_connection.get()

    @classmethod
    def get_query_tracker(cls) -> QueryTracker | None:
        return _query_tracker.get()

    @classmethod
    def log_query(cls, query: str, params: list[Any]):
        """Write a statement to the DEBUG log and to the active query tracker"""
        logger.debug("Executing %s with params %r", query, params)
        tracker = _query_tracker.get()
        if tracker and tracker.enabled:
            # Drop this frame and the DatabaseOperations frame
            caller_stack = traceback.format_list(traceback.extract_stack()[:-2])
            tracker.record(query, params, "".join(caller_stack))

    @classmethod
    @asynccontextmanager
    async def connection(cls, db_name: str = "default", track_queries: bool = False):
        """Bind a pooled connection to the current context for one request.

        Nested blocks reuse the bound connection. The acquired connection goes
        back to the pool on exit, also when the block raises.

        Args:
            db_name: Name of the database pool to use
            track_queries: Record the statements of this block in a QueryTracker
        """
        current_conn = _current_connection.get()
        if current_conn:
            if track_queries:
                async with cls.track_queries():
                    yield current_conn
            else:
                yield current_conn
            return

        pool = await cls.get_pool(db_name)
        async with pool.acquire() as conn:
            conn_token = _current_connection.set(conn)
            try:
                if track_queries:
                    async with cls.track_queries():
                        yield conn
                else:
                    yield conn
            finally:
                _current_connection.reset(conn_token)

    @classmethod
    @asynccontextmanager
    async def track_queries(cls):
        """Record every statement executed inside the block.

        async with DatabaseManager.connection():
            async with DatabaseManager.track_queries() as tracker:
                await repo.get_total()
                statements = tracker.statements()
        """
        tracker = _query_tracker.get()
        if tracker:
            was_enabled = tracker.enabled
            tracker.enabled = True
            try:
                yield tracker
            finally:
                tracker.enabled = was_enabled
            return

        tracker = QueryTracker()
        tracker.enabled = True
        token = _query_tracker.set(tracker)
        try:
            yield tracker
        finally:
            _query_tracker.reset(token)
