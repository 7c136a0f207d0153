"""PostgreSQL fixtures for the relational repository tests.

Tests here run against a throwaway container and are skipped when Docker is
not available.
"""

import asyncpg
import pytest
import pytest_asyncio

from booking.sql.db_context import DatabaseManager
from booking.sql.migrations import apply_migrations

TEST_DB = "test_db"


@pytest.fixture(scope="session")
def postgres_container():
    """Start a PostgreSQL test container for the session."""
    from testcontainers.postgres import PostgresContainer

    container = PostgresContainer("postgres:17")
    try:
        container.start()
    except Exception as e:
        pytest.skip(f"PostgreSQL container unavailable: {e}")
    yield container
    container.stop()


@pytest.fixture(scope="session")
def postgres_dsn(postgres_container) -> str:
    host = postgres_container.get_container_host_ip()
    port = postgres_container.get_exposed_port(5432)
    return (
        f"postgresql://{postgres_container.username}:{postgres_container.password}"
        f"@{host}:{port}/{postgres_container.dbname}"
    )


@pytest_asyncio.fixture
async def test_db_pool(postgres_dsn):
    """Pool with the migrated schema, emptied after each test."""
    # A new pool per test avoids sharing connections across event loops
    pool = await asyncpg.create_pool(postgres_dsn, min_size=1, max_size=5)
    await DatabaseManager.add_pool(TEST_DB, pool)
    await apply_migrations(TEST_DB)

    yield pool

    async with pool.acquire() as conn:
        await conn.execute("TRUNCATE TABLE timeslots, venues RESTART IDENTITY CASCADE")
    await DatabaseManager.close_pool(TEST_DB)
