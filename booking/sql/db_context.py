import traceback
from contextlib import asynccontextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from functools import wraps
from typing import Any

import asyncpg
from loguru import logger

# Context variable to store the current database connection (only one per context)
_current_connection: ContextVar[asyncpg.Connection | None] = ContextVar(
    "current_connection", default=None
)
_db_pools: dict[str, asyncpg.Pool] = {}


@dataclass
class QueryLog:
    """A query executed while tracking was on"""

    query: str
    params: list[Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    stack_trace: str | None = None


class QueryTracker:
    """Collects the queries executed during a context"""

    def __init__(self):
        self.queries: list[QueryLog] = []
        self._enabled: bool = False

    def enable(self):
        self._enabled = True

    def disable(self):
        self._enabled = False

    def is_enabled(self) -> bool:
        return self._enabled

    def log_query(self, query: str, params: list[Any], stack_trace: str | None = None):
        if self._enabled:
            self.queries.append(
                QueryLog(query=query, params=params, stack_trace=stack_trace)
            )

    def get_queries(self) -> list[QueryLog]:
        return self.queries.copy()

    def count(self) -> int:
        return len(self.queries)


_query_tracker: ContextVar[QueryTracker | None] = ContextVar(
    "query_tracker", default=None
)


class DatabaseManager:
    """Manages named asyncpg pools and the connection bound to the current context"""

    @classmethod
    async def add_pool(cls, name: str, pool: asyncpg.Pool):
        _db_pools[name] = pool

    @classmethod
    async def get_pool(cls, name: str = "default") -> asyncpg.Pool:
        if name not in _db_pools:
            raise ValueError(f"Database pool '{name}' not found")
        return _db_pools[name]

    @classmethod
    async def close_pool(cls, name: str = "default"):
        """Close a pool and forget it. Unknown names are ignored."""
        pool = _db_pools.pop(name, None)
        if pool is not None:
            await pool.close()

    @classmethod
    def get_current_connection(cls) -> asyncpg.Connection | None:
        return _current_connection.get()

    @classmethod
    def get_query_tracker(cls) -> QueryTracker | None:
        return _query_tracker.get()

    @classmethod
    def log_query(cls, query: str, params: list[Any]):
        """Log a query, and record it on the current tracker if there is one"""
        logger.debug(f"SQL: {query} {params!r}")
        tracker = _query_tracker.get()
        if tracker:
            # Skip this frame and the DatabaseOperations frame
            stack = traceback.extract_stack()[:-2]
            tracker.log_query(query, params, "".join(traceback.format_list(stack)))

    @classmethod
    @asynccontextmanager
    async def transaction(cls, db_name: str = "default"):
        """Run the block inside a transaction.

        Inside an existing transaction this opens a nested transaction
        (savepoint) on the same connection. Otherwise a connection is acquired
        from the named pool, bound to the current context and released when
        the block exits, whether it exits normally or not.
        """
        current_conn = _current_connection.get()

        if current_conn:
            async with current_conn.transaction():
                yield current_conn
        else:
            pool = await cls.get_pool(db_name)
            async with pool.acquire() as conn, conn.transaction():
                token = _current_connection.set(conn)
                try:
                    yield conn
                finally:
                    _current_connection.reset(token)

    @classmethod
    @asynccontextmanager
    async def track_queries(cls):
        """Record every query executed inside the block.

        async with DatabaseManager.transaction():
            async with DatabaseManager.track_queries() as tracker:
                await venues.get(venue_id)
                queries = tracker.get_queries()
        """
        current_tracker = _query_tracker.get()

        if current_tracker:
            was_enabled = current_tracker.is_enabled()
            current_tracker.enable()
            try:
                yield current_tracker
            finally:
                if not was_enabled:
                    current_tracker.disable()
        else:
            tracker = QueryTracker()
            tracker.enable()
            token = _query_tracker.set(tracker)
            try:
                yield tracker
            finally:
                _query_tracker.reset(token)


def transactional(db_name: str = "default"):
    """Decorator to run a coroutine function within a database transaction.

    Example:
        @transactional()
        async def publish_venue(venue_id):
            return await venues.update(venue_id, VenueUpdate(published=True))
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            async with DatabaseManager.transaction(db_name):
                return await func(*args, **kwargs)

        return wrapper

    return decorator
