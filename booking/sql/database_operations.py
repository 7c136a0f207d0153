from typing import Any

import asyncpg

from booking.sql.db_context import DatabaseManager


class DatabaseOperations:
    """Composition class for database operations"""

    @staticmethod
    def get_connection() -> asyncpg.Connection:
        """Get the current database connection from context"""
        conn = DatabaseManager.get_current_connection()
        if not conn:
            raise ValueError(
                "No active transaction found. Repository methods must be called within a transaction context."
            )
        return conn

    async def fetch_all(self, query: str, params: list[Any]) -> list[asyncpg.Record]:
        conn = self.get_connection()
        DatabaseManager.log_query(query, params)
        return await conn.fetch(query, *params)

    async def fetch_one(self, query: str, params: list[Any]) -> asyncpg.Record | None:
        conn = self.get_connection()
        DatabaseManager.log_query(query, params)
        return await conn.fetchrow(query, *params)

    async def execute_query(self, query: str, params: list[Any]) -> str:
        """Execute a statement and return its status string (e.g. "DELETE 1")"""
        conn = self.get_connection()
        DatabaseManager.log_query(query, params)
        return await conn.execute(query, *params)
