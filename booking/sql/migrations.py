"""Schema migrations for the relational store.

Applied versions are recorded in ``schema_migrations``; ``apply_migrations``
runs the missing ones in order, so it is safe to call on every start. Append
new migrations with the next version number, never edit an applied one.
"""

from loguru import logger

from booking.sql.db_context import DatabaseManager

MIGRATIONS: list[tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS venues (
            id SERIAL PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT NOT NULL,
            address TEXT NOT NULL,
            seats INTEGER,
            published BOOLEAN NOT NULL DEFAULT FALSE,
            created_at TIMESTAMP WITH TIME ZONE,
            last_modified TIMESTAMP WITH TIME ZONE,
            deleted_at TIMESTAMP WITH TIME ZONE
        );
        """,
    ),
    (
        2,
        """
        CREATE TABLE IF NOT EXISTS timeslots (
            id SERIAL PRIMARY KEY,
            venue_id INTEGER NOT NULL,
            title TEXT NOT NULL,
            description TEXT,
            start TIMESTAMP WITH TIME ZONE NOT NULL,
            "end" TIMESTAMP WITH TIME ZONE NOT NULL,
            published BOOLEAN NOT NULL DEFAULT FALSE,
            created_at TIMESTAMP WITH TIME ZONE,
            last_modified TIMESTAMP WITH TIME ZONE,
            deleted_at TIMESTAMP WITH TIME ZONE,
            CONSTRAINT "fk-timeslot-venue_id" FOREIGN KEY (venue_id) REFERENCES venues (id),
            CONSTRAINT timeslot_range CHECK ("end" > start)
        );
        CREATE INDEX IF NOT EXISTS timeslots_venue_id_idx ON timeslots (venue_id);
        """,
    ),
]


async def apply_migrations(db_name: str = "default") -> list[int]:
    """Apply pending migrations and return the versions that ran."""
    pool = await DatabaseManager.get_pool(db_name)
    applied: list[int] = []

    async with pool.acquire() as conn, conn.transaction():
        await conn.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                version INTEGER PRIMARY KEY,
                applied_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT now()
            )
            """
        )
        # Serialize concurrent starters on the same database
        await conn.execute("LOCK TABLE schema_migrations IN EXCLUSIVE MODE")
        done = {r["version"] for r in await conn.fetch("SELECT version FROM schema_migrations")}

        for version, sql in MIGRATIONS:
            if version in done:
                continue
            logger.info(f"Applying migration {version}")
            await conn.execute(sql)
            await conn.execute(
                "INSERT INTO schema_migrations (version) VALUES ($1)", version
            )
            applied.append(version)

    return applied
